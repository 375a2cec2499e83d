"""
Obras ERP - Financeiro Model
Lancamentos (contas a pagar/receber) e notas fiscais
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Integer, Numeric, ForeignKey

from app.database import Base
from app.utils import iso, money


class LancamentoTipo(str, enum.Enum):
    REVENUE = "Receita"
    EXPENSE = "Despesa"


class LancamentoStatus(str, enum.Enum):
    """Status do lançamento"""
    PENDING = "Pendente"
    PAID = "Pago"
    OVERDUE = "Atrasado"


# Status que ainda representam valor a pagar
OPEN_STATUSES = (LancamentoStatus.PENDING.value, LancamentoStatus.OVERDUE.value)


class Lancamento(Base):
    """Lançamento financeiro (receita ou despesa) de uma obra"""
    __tablename__ = "lancamentos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)
    obra_nome = Column(String(255), default="")

    tipo = Column(String(20), default=LancamentoTipo.EXPENSE.value)
    fornecedor_id = Column(String(36), ForeignKey("fornecedores.id"), index=True)
    fornecedor_nome = Column(String(255), default="")

    descricao = Column(Text, nullable=False)
    valor = Column(Numeric(14, 2), nullable=False, default=0)
    data_vencimento = Column(Date, nullable=False, index=True)
    data_pagamento = Column(Date)
    status = Column(String(20), default=LancamentoStatus.PENDING.value, index=True)
    categoria = Column(String(100))

    # Parcelamento
    parcela = Column(Integer)
    total_parcelas = Column(Integer)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "obra_nome": self.obra_nome,
            "tipo": self.tipo,
            "fornecedor_id": self.fornecedor_id,
            "fornecedor_nome": self.fornecedor_nome,
            "descricao": self.descricao,
            "valor": money(self.valor),
            "data_vencimento": iso(self.data_vencimento),
            "data_pagamento": iso(self.data_pagamento),
            "status": self.status,
            "categoria": self.categoria,
            "parcela": self.parcela,
            "total_parcelas": self.total_parcelas,
            "created_at": iso(self.created_at),
        }


class NotaFiscal(Base):
    """Nota fiscal - sempre vinculada a um lançamento"""
    __tablename__ = "notas_fiscais"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    obra_id = Column(String(36), ForeignKey("obras.id"), nullable=False, index=True)
    lancamento_id = Column(String(36), ForeignKey("lancamentos.id"), nullable=False, index=True)

    numero = Column(String(50), nullable=False)
    fornecedor_id = Column(String(36), ForeignKey("fornecedores.id"))
    fornecedor_nome = Column(String(255), default="")
    valor = Column(Numeric(14, 2), default=0)
    data_emissao = Column(Date)
    arquivo_url = Column(String(500))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "obra_id": self.obra_id,
            "lancamento_id": self.lancamento_id,
            "numero": self.numero,
            "fornecedor_id": self.fornecedor_id,
            "fornecedor_nome": self.fornecedor_nome,
            "valor": money(self.valor),
            "data_emissao": iso(self.data_emissao),
            "arquivo_url": self.arquivo_url,
            "created_at": iso(self.created_at),
        }
