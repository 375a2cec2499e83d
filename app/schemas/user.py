"""
Obras ERP - User Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from app.models import UserRole


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.USER
    avatar: Optional[str] = Field(None, max_length=500)
    obra_id: Optional[str] = None

    class Config:
        use_enum_values = True


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None
    avatar: Optional[str] = Field(None, max_length=500)
    obra_id: Optional[str] = None

    class Config:
        use_enum_values = True


class UserResponse(BaseModel):
    id: str
    company_id: str
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    obra_id: Optional[str] = None
    email_confirmed: bool = False
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
