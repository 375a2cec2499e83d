"""
Obras ERP - Compras Model
Cotacoes de fornecedores e lista de compras da obra
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Numeric, ForeignKey

from app.database import Base
from app.utils import iso, money


class CotacaoStatus(str, enum.Enum):
    """Status da cotação"""
    REQUESTED = "Solicitado"
    RECEIVED = "Recebido"
    APPROVED = "Aprovado"
    REJECTED = "Rejeitado"


class CompraStatus(str, enum.Enum):
    """Status do item da lista de compras"""
    PLANNED = "Planejado"
    PURCHASED = "Comprado"


class Cotacao(Base):
    """Cotação de fornecedor aguardando aprovação"""
    __tablename__ = "cotacoes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)
    fornecedor_id = Column(String(36), ForeignKey("fornecedores.id"), index=True)
    fornecedor_nome = Column(String(255), default="")

    descricao = Column(Text, nullable=False)
    valor = Column(Numeric(14, 2), default=0)
    status = Column(String(20), default=CotacaoStatus.REQUESTED.value, index=True)

    criado_em = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "fornecedor_id": self.fornecedor_id,
            "fornecedor_nome": self.fornecedor_nome,
            "descricao": self.descricao,
            "valor": money(self.valor),
            "status": self.status,
            "criado_em": iso(self.criado_em),
        }


class ListaCompra(Base):
    """Item planejado/comprado da lista de compras"""
    __tablename__ = "lista_compras"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)
    etapa_id = Column(String(36), ForeignKey("etapas.id"))

    descricao = Column(Text, nullable=False)
    valor_previsto = Column(Numeric(14, 2), default=0)
    data_prevista = Column(Date)
    status = Column(String(20), default=CompraStatus.PLANNED.value, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "etapa_id": self.etapa_id,
            "descricao": self.descricao,
            "valor_previsto": money(self.valor_previsto),
            "data_prevista": iso(self.data_prevista),
            "status": self.status,
            "created_at": iso(self.created_at),
        }
