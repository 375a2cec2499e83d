"""
Obras ERP - Lancamento / Nota Fiscal Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from app.models import LancamentoTipo, LancamentoStatus


class LancamentoCreate(BaseModel):
    obra_id: str
    tipo: LancamentoTipo = LancamentoTipo.EXPENSE
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = Field("", max_length=255)
    descricao: str = Field(..., min_length=1)
    valor: Decimal = Field(..., ge=0)
    data_vencimento: date
    data_pagamento: Optional[date] = None
    status: LancamentoStatus = LancamentoStatus.PENDING
    categoria: Optional[str] = Field(None, max_length=100)
    parcela: Optional[int] = Field(None, ge=1)
    total_parcelas: Optional[int] = Field(None, ge=1)

    class Config:
        use_enum_values = True


class LancamentoUpdate(BaseModel):
    tipo: Optional[LancamentoTipo] = None
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = Field(None, max_length=255)
    descricao: Optional[str] = Field(None, min_length=1)
    valor: Optional[Decimal] = Field(None, ge=0)
    data_vencimento: Optional[date] = None
    data_pagamento: Optional[date] = None
    status: Optional[LancamentoStatus] = None
    categoria: Optional[str] = Field(None, max_length=100)
    parcela: Optional[int] = Field(None, ge=1)
    total_parcelas: Optional[int] = Field(None, ge=1)

    class Config:
        use_enum_values = True


class LancamentoResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    obra_nome: Optional[str] = ""
    tipo: str
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = ""
    descricao: str
    valor: float
    data_vencimento: date
    data_pagamento: Optional[date] = None
    status: str
    categoria: Optional[str] = None
    parcela: Optional[int] = None
    total_parcelas: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotaFiscalCreate(BaseModel):
    obra_id: str
    # Obrigatorio; validado na rota para devolver a mensagem de negocio
    lancamento_id: Optional[str] = None
    numero: str = Field(..., min_length=1, max_length=50)
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = Field("", max_length=255)
    valor: Decimal = Field(Decimal("0"), ge=0)
    data_emissao: Optional[date] = None
    arquivo_url: Optional[str] = Field(None, max_length=500)


class NotaFiscalUpdate(BaseModel):
    lancamento_id: Optional[str] = None
    numero: Optional[str] = Field(None, min_length=1, max_length=50)
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = Field(None, max_length=255)
    valor: Optional[Decimal] = Field(None, ge=0)
    data_emissao: Optional[date] = None
    arquivo_url: Optional[str] = Field(None, max_length=500)


class NotaFiscalResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    lancamento_id: str
    numero: str
    fornecedor_id: Optional[str] = None
    fornecedor_nome: Optional[str] = ""
    valor: float = 0
    data_emissao: Optional[date] = None
    arquivo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
