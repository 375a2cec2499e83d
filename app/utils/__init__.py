from .serializers import iso, money
from .calc import round_half_up, to_decimal, days_between

__all__ = [
    "iso",
    "money",
    "round_half_up",
    "to_decimal",
    "days_between"
]
