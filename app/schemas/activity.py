"""
Obras ERP - Activity Log Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models import ActivityAction


class ActivityLogCreate(BaseModel):
    """Registro manual enviado pelo front-end (ex: exportacoes)"""
    action: ActivityAction
    entity: str = Field(..., min_length=1, max_length=50)
    entity_id: Optional[str] = None
    entity_name: Optional[str] = Field("", max_length=255)

    class Config:
        use_enum_values = True


class ActivityLogResponse(BaseModel):
    id: str
    company_id: str
    user_id: Optional[str] = None
    user_name: Optional[str] = ""
    action: str
    entity: str
    entity_id: Optional[str] = None
    entity_name: Optional[str] = ""
    timestamp: Optional[datetime] = None

    class Config:
        from_attributes = True
