"""
Obras ERP - Activity Log Model
Trilha de auditoria (somente inserção)
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey

from app.database import Base
from app.utils import iso


class ActivityAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ActivityLog(Base):
    """Histórico de ações dos usuários"""
    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)

    user_id = Column(String(36))
    user_name = Column(String(255), default="")
    action = Column(String(20), nullable=False)
    entity = Column(String(50), nullable=False)
    entity_id = Column(String(36))
    entity_name = Column(String(255), default="")

    timestamp = Column(DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "company_id": self.company_id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "action": self.action,
            "entity": self.entity,
            "entity_id": self.entity_id,
            "entity_name": self.entity_name,
            "timestamp": iso(self.timestamp),
        }
