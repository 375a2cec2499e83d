"""
Obras ERP - Medicao Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class MedicaoCreate(BaseModel):
    """Medicao nasce Pendente; status muda so por aprovar/pagar"""
    obra_id: str
    etapa_id: Optional[str] = None
    descricao: str = Field(..., min_length=1)
    percentual_executado: float = Field(0, ge=0, le=100)
    valor_medido: Decimal = Field(Decimal("0"), ge=0)
    data_medicao: date


class MedicaoUpdate(BaseModel):
    etapa_id: Optional[str] = None
    descricao: Optional[str] = Field(None, min_length=1)
    percentual_executado: Optional[float] = Field(None, ge=0, le=100)
    valor_medido: Optional[Decimal] = Field(None, ge=0)
    data_medicao: Optional[date] = None


class MedicaoResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    etapa_id: Optional[str] = None
    descricao: str
    percentual_executado: float = 0
    valor_medido: float = 0
    data_medicao: date
    status: str
    lancamento_gerado_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
