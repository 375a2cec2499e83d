"""
Obras ERP - Cliente / Fornecedor Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ClienteCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    cpf_cnpj: Optional[str] = Field(None, max_length=20)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)


class ClienteUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    cpf_cnpj: Optional[str] = Field(None, max_length=20)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)


class ClienteResponse(BaseModel):
    id: str
    company_id: str
    nome: str
    cpf_cnpj: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FornecedorCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    cnpj: Optional[str] = Field(None, max_length=20)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)


class FornecedorUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    cnpj: Optional[str] = Field(None, max_length=20)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)


class FornecedorResponse(BaseModel):
    id: str
    company_id: str
    nome: str
    cnpj: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
