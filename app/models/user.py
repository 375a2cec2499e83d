"""
Obras ERP - User Model
Usuarios de uma empresa (admin ou usuario comum)
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey

from app.database import Base
from app.utils import iso


class UserRole(str, enum.Enum):
    """Perfis de acesso"""
    ADMIN = "admin"
    USER = "user"


class User(Base):
    """Modelo de usuário"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), default=UserRole.USER.value)
    avatar = Column(String(500))
    # Usuario restrito a uma obra (opcional)
    obra_id = Column(String(36))

    # Verificacao de email
    email_confirmed = Column(Boolean, default=False)
    verification_token = Column(String(64), index=True)
    verification_token_expires_at = Column(DateTime)

    last_login_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "avatar": self.avatar,
            "obra_id": self.obra_id,
            "email_confirmed": self.email_confirmed,
            "last_login_at": iso(self.last_login_at),
            "created_at": iso(self.created_at),
        }
