"""
Obras ERP - Cotacao / Lista de Compras Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from app.models import CotacaoStatus, CompraStatus


class CotacaoCreate(BaseModel):
    obra_id: str
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = Field("", max_length=255)
    descricao: str = Field(..., min_length=1)
    valor: Decimal = Field(Decimal("0"), ge=0)
    status: CotacaoStatus = CotacaoStatus.REQUESTED

    class Config:
        use_enum_values = True


class CotacaoUpdate(BaseModel):
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = Field(None, max_length=255)
    descricao: Optional[str] = Field(None, min_length=1)
    valor: Optional[Decimal] = Field(None, ge=0)
    status: Optional[CotacaoStatus] = None

    class Config:
        use_enum_values = True


class CotacaoReceberRequest(BaseModel):
    """Resposta do fornecedor (valor cotado)"""
    valor: Optional[Decimal] = Field(None, ge=0)


class CotacaoResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = ""
    descricao: str
    valor: float = 0
    status: str
    criado_em: Optional[datetime] = None

    class Config:
        from_attributes = True


class ListaCompraCreate(BaseModel):
    obra_id: str
    etapa_id: Optional[str] = None
    descricao: str = Field(..., min_length=1)
    valor_previsto: Decimal = Field(Decimal("0"), ge=0)
    data_prevista: Optional[date] = None
    status: CompraStatus = CompraStatus.PLANNED

    class Config:
        use_enum_values = True


class ListaCompraUpdate(BaseModel):
    etapa_id: Optional[str] = None
    descricao: Optional[str] = Field(None, min_length=1)
    valor_previsto: Optional[Decimal] = Field(None, ge=0)
    data_prevista: Optional[date] = None
    status: Optional[CompraStatus] = None

    class Config:
        use_enum_values = True


class ListaCompraResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    etapa_id: Optional[str] = None
    descricao: str
    valor_previsto: float = 0
    data_prevista: Optional[date] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
