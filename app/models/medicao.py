"""
Obras ERP - Medicao Model
Medições (faturamento por avanço físico)
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Float, Numeric, ForeignKey

from app.database import Base
from app.utils import iso, money


class MedicaoStatus(str, enum.Enum):
    """Pendente -> Aprovado -> Pago (Pago gera lançamento)"""
    PENDING = "Pendente"
    APPROVED = "Aprovado"
    PAID = "Pago"


class Medicao(Base):
    __tablename__ = "medicoes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)
    etapa_id = Column(String(36), ForeignKey("etapas.id"), index=True)

    descricao = Column(Text, nullable=False)
    percentual_executado = Column(Float, default=0)
    valor_medido = Column(Numeric(14, 2), default=0)
    data_medicao = Column(Date, nullable=False)
    status = Column(String(20), default=MedicaoStatus.PENDING.value, index=True)

    # Preenchido quando a medição é paga
    lancamento_gerado_id = Column(String(36), ForeignKey("lancamentos.id"))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "etapa_id": self.etapa_id,
            "descricao": self.descricao,
            "percentual_executado": self.percentual_executado or 0,
            "valor_medido": money(self.valor_medido),
            "data_medicao": iso(self.data_medicao),
            "status": self.status,
            "lancamento_gerado_id": self.lancamento_gerado_id,
            "created_at": iso(self.created_at),
        }
