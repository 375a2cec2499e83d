"""
Obras ERP - API Dependencies
Usuario autenticado e escopo de empresa para as rotas /api
"""
import logging
from typing import Optional, Type

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import verify_access_token
from app.core.tenancy import TenantScope
from app.database import get_db
from app.models import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Dependency para obter usuario autenticado"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token não fornecido."
        )

    payload = verify_access_token(credentials.credentials)
    if not payload or not payload.get("sub") or not payload.get("company_id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido ou expirado."
        )

    result = await db.execute(
        select(User).where(User.id == payload["sub"], User.company_id == payload["company_id"])
    )
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuário não encontrado."
        )

    return user


async def get_scope(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> TenantScope:
    """Acesso a dados da empresa do usuario autenticado"""
    return TenantScope(db, user.company_id, user)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso negado. Apenas administradores."
        )
    return user


async def get_or_404(scope: TenantScope, model: Type, entity_id: str, message: str):
    """Busca registro da empresa ou responde 404"""
    obj = await scope.get(model, entity_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
    return obj


def apply_update(obj, update_data: dict):
    for field, value in update_data.items():
        setattr(obj, field, value)
    return obj
