"""
Obras ERP - Cadastros Model
Clientes e fornecedores da empresa
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey

from app.database import Base
from app.utils import iso


class Cliente(Base):
    """Cliente (dono da obra)"""
    __tablename__ = "clientes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)

    nome = Column(String(255), nullable=False, index=True)
    cpf_cnpj = Column(String(20))
    telefone = Column(String(20))
    email = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "nome": self.nome,
            "cpf_cnpj": self.cpf_cnpj,
            "telefone": self.telefone,
            "email": self.email,
            "created_at": iso(self.created_at),
        }


class Fornecedor(Base):
    """Fornecedor de materiais/servicos"""
    __tablename__ = "fornecedores"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)

    nome = Column(String(255), nullable=False, index=True)
    cnpj = Column(String(20))
    telefone = Column(String(20))
    email = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "nome": self.nome,
            "cnpj": self.cnpj,
            "telefone": self.telefone,
            "email": self.email,
            "created_at": iso(self.created_at),
        }
