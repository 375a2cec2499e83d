"""
Obras ERP - Comentario / Relatorio Semanal Schemas
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime


class ComentarioCreate(BaseModel):
    obra_id: str
    comentario: str = Field(..., min_length=1)


class ComentarioUpdate(BaseModel):
    comentario: Optional[str] = Field(None, min_length=1)
    oculto: Optional[bool] = None


class ComentarioResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    usuario_id: Optional[str] = None
    usuario_nome: Optional[str] = ""
    comentario: str
    oculto: bool = False
    data_criacao: Optional[datetime] = None

    class Config:
        from_attributes = True


class RelatorioSemanalCreate(BaseModel):
    obra_id: str
    semana_inicio: date
    semana_fim: date
    descricao_atividades: Optional[str] = ""
    fotos: List[str] = []
    observacoes_tecnicas: Optional[str] = ""


class RelatorioSemanalUpdate(BaseModel):
    semana_inicio: Optional[date] = None
    semana_fim: Optional[date] = None
    descricao_atividades: Optional[str] = None
    fotos: Optional[List[str]] = None
    observacoes_tecnicas: Optional[str] = None


class RelatorioSemanalResponse(BaseModel):
    id: str
    company_id: str
    obra_id: str
    semana_inicio: date
    semana_fim: date
    descricao_atividades: Optional[str] = ""
    fotos: List[str] = []
    observacoes_tecnicas: Optional[str] = ""
    criado_por: Optional[str] = None
    criado_por_nome: Optional[str] = ""
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
