"""
Obras ERP - Acompanhamento Model
Comentarios da obra e relatorios semanais
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Text, ForeignKey
from sqlalchemy.dialects.sqlite import JSON

from app.database import Base
from app.utils import iso


class ComentarioObra(Base):
    """Comentário da obra (exclusão lógica via ``oculto``)"""
    __tablename__ = "comentarios_obra"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)

    usuario_id = Column(String(36))
    usuario_nome = Column(String(255), default="")
    comentario = Column(Text, nullable=False)
    oculto = Column(Boolean, default=False)

    data_criacao = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "usuario_id": self.usuario_id,
            "usuario_nome": self.usuario_nome,
            "comentario": self.comentario,
            "oculto": bool(self.oculto),
            "data_criacao": iso(self.data_criacao),
        }


class RelatorioSemanal(Base):
    """Relatório semanal de atividades da obra"""
    __tablename__ = "relatorios_semanais"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)

    semana_inicio = Column(Date, nullable=False)
    semana_fim = Column(Date, nullable=False)
    descricao_atividades = Column(Text, default="")
    fotos = Column(JSON, default=list)
    observacoes_tecnicas = Column(Text, default="")
    criado_por = Column(String(36))
    criado_por_nome = Column(String(255), default="")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "semana_inicio": iso(self.semana_inicio),
            "semana_fim": iso(self.semana_fim),
            "descricao_atividades": self.descricao_atividades,
            "fotos": self.fotos or [],
            "observacoes_tecnicas": self.observacoes_tecnicas,
            "criado_por": self.criado_por,
            "criado_por_nome": self.criado_por_nome,
            "created_at": iso(self.created_at),
        }
