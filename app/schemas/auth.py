"""
Obras ERP - Auth Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Cadastro de empresa + usuario administrador"""
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    company_name: Optional[str] = Field(None, max_length=255)
    company_cnpj: Optional[str] = Field(None, max_length=20)


class RegisterResponse(BaseModel):
    message: str
    token: Optional[str] = None
    user: Optional[dict] = None


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: dict
