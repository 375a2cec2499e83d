"""
Obras ERP - Serializers
Conversao de tipos do banco para JSON
"""
from datetime import date
from typing import Any, Optional


def iso(value: Optional[date]) -> Optional[str]:
    """Data/datetime em ISO 8601 (None passa direto)"""
    return value.isoformat() if value else None


def money(value: Any) -> float:
    """Valor monetario (Decimal/Numeric) como float para o JSON"""
    if value is None:
        return 0.0
    return float(value)
