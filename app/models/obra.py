"""
Obras ERP - Obra Model
Obras (projetos de construcao) e suas etapas
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Integer, Float, Numeric, ForeignKey

from app.database import Base
from app.utils import iso, money


class ObraStatus(str, enum.Enum):
    """Status da obra"""
    IN_PROGRESS = "Em andamento"
    COMPLETED = "Concluida"
    PAUSED = "Pausada"
    LATE = "Atrasada"
    CANCELLED = "Cancelada"


class Obra(Base):
    """
    Obra - agregado raiz de cada empresa.

    ``progress`` e ``status`` sao recalculados pelas etapas
    (app.services.etapas) assim que a obra tem etapas cadastradas.
    """
    __tablename__ = "obras"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    image_url = Column(String(500))

    # Cliente (nome livre + referencia opcional ao cadastro)
    client = Column(String(255), index=True)
    cliente_id = Column(String(36))

    # Endereço
    address = Column(String(255))
    cep = Column(String(9))
    number = Column(String(20))
    complement = Column(String(100))

    start_date = Column(Date)
    end_date = Column(Date)

    # Orçamento
    materials_cost = Column(Numeric(14, 2), default=0)
    labor_cost = Column(Numeric(14, 2), default=0)
    total_cost = Column(Numeric(14, 2), default=0)

    progress = Column(Integer, default=0)
    status = Column(String(20), default=ObraStatus.IN_PROGRESS.value, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            "client": self.client,
            "cliente_id": self.cliente_id,
            "address": self.address,
            "cep": self.cep,
            "number": self.number,
            "complement": self.complement,
            "start_date": iso(self.start_date),
            "end_date": iso(self.end_date),
            "materials_cost": money(self.materials_cost),
            "labor_cost": money(self.labor_cost),
            "total_cost": money(self.total_cost),
            "progress": self.progress or 0,
            "status": self.status,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }


class Etapa(Base):
    """Etapa da obra com peso previsto e percentual executado"""
    __tablename__ = "etapas"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)

    nome = Column(String(255), nullable=False)
    descricao = Column(Text, default="")
    data_inicio = Column(Date)
    data_fim = Column(Date)

    # Peso da etapa na obra (soma por obra <= 100)
    percentual_previsto = Column(Float, default=0)
    percentual_executado = Column(Float, default=0)
    ordem = Column(Integer, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "nome": self.nome,
            "descricao": self.descricao,
            "data_inicio": iso(self.data_inicio),
            "data_fim": iso(self.data_fim),
            "percentual_previsto": self.percentual_previsto or 0,
            "percentual_executado": self.percentual_executado or 0,
            "ordem": self.ordem,
            "created_at": iso(self.created_at),
        }
