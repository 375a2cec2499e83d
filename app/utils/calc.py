"""
Obras ERP - Calculation helpers
"""
import math
from datetime import date, datetime, time
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Union

Number = Union[int, float, Decimal]


def to_decimal(value: Any) -> Decimal:
    """Converte numero/None para Decimal sem perder centavos de float"""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """
    Arredonda para o inteiro mais proximo, meios para cima (+infinito).

    round() do Python arredonda meios para o par (round(2.5) == 2), o que
    nao bate com os percentuais exibidos no front.
    """
    if isinstance(value, Decimal):
        return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
    return int(math.floor(value + 0.5))


def days_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """
    Dias de ``start`` ate ``end`` arredondados para cima.

    Datas sem hora contam a partir da meia-noite, entao uma data vencida
    ontem ja conta 2 dias durante a tarde de hoje.
    """
    if not isinstance(start, datetime):
        start = datetime.combine(start, time.min)
    if not isinstance(end, datetime):
        end = datetime.combine(end, time.min)
    return math.ceil((end - start).total_seconds() / 86400)
