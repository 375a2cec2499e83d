"""
Obras ERP - Company Model
Empresa (tenant): toda entidade do sistema pertence a uma company
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime

from app.database import Base
from app.utils import iso


class Company(Base):
    """Empresa construtora - particao multi-tenant"""
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    cnpj = Column(String(20), default="")

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "cnpj": self.cnpj,
            "created_at": iso(self.created_at),
        }
