"""
Obras ERP - Obra / Etapa Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from app.models import ObraStatus


class ObraCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    client: Optional[str] = Field(None, max_length=255)
    cliente_id: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    cep: Optional[str] = Field(None, max_length=9)
    number: Optional[str] = Field(None, max_length=20)
    complement: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    materials_cost: Decimal = Field(Decimal("0"), ge=0)
    labor_cost: Decimal = Field(Decimal("0"), ge=0)
    # Quando omitido: materiais + mao de obra
    total_cost: Optional[Decimal] = Field(None, ge=0)
    progress: int = Field(0, ge=0, le=100)
    status: ObraStatus = ObraStatus.IN_PROGRESS

    class Config:
        use_enum_values = True


class ObraUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    client: Optional[str] = Field(None, max_length=255)
    cliente_id: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    cep: Optional[str] = Field(None, max_length=9)
    number: Optional[str] = Field(None, max_length=20)
    complement: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    materials_cost: Optional[Decimal] = Field(None, ge=0)
    labor_cost: Optional[Decimal] = Field(None, ge=0)
    total_cost: Optional[Decimal] = Field(None, ge=0)
    progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[ObraStatus] = None

    class Config:
        use_enum_values = True


class ObraResponse(BaseModel):
    id: str
    company_id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    client: Optional[str] = None
    cliente_id: Optional[str] = None
    address: Optional[str] = None
    cep: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    materials_cost: float = 0
    labor_cost: float = 0
    total_cost: float = 0
    progress: int = 0
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EtapaCreate(BaseModel):
    obra_id: str
    nome: str = Field(..., min_length=1, max_length=255)
    descricao: Optional[str] = ""
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    percentual_previsto: float = Field(0, ge=0, le=100)
    percentual_executado: float = Field(0, ge=0, le=100)
    ordem: int = 0


class EtapaUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    descricao: Optional[str] = None
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    percentual_previsto: Optional[float] = Field(None, ge=0, le=100)
    percentual_executado: Optional[float] = Field(None, ge=0, le=100)
    ordem: Optional[int] = None


class EtapaResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    nome: str
    descricao: Optional[str] = ""
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    percentual_previsto: float = 0
    percentual_executado: float = 0
    ordem: Optional[int] = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
