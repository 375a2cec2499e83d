"""
Obras ERP - Users API
Usuarios da empresa
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select

from app.models import User, ActivityAction
from app.schemas import UserCreate, UserUpdate, UserResponse
from app.core import get_password_hash
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, require_admin, get_or_404, apply_update
from app.services.activity import registrar_atividade

router = APIRouter(prefix="/users", tags=["Users"])

NOT_FOUND = "Usuário não encontrado."


async def _email_em_uso(scope: TenantScope, email: str) -> bool:
    # Email e unico no sistema inteiro (login nao informa empresa)
    result = await scope.db.execute(select(User.id).where(User.email == email))
    return result.first() is not None


@router.get("", response_model=List[UserResponse])
async def list_users(scope: TenantScope = Depends(get_scope)):
    users = await scope.all(User, order_by=[User.name])
    return [u.to_dict() for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, scope: TenantScope = Depends(get_scope)):
    user = await get_or_404(scope, User, user_id, NOT_FOUND)
    return user.to_dict()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreate, scope: TenantScope = Depends(get_scope)):
    """Cria usuario na empresa (ja confirmado: cadastrado por um colega)"""
    email = request.email.lower()
    if await _email_em_uso(scope, email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email já cadastrado.")

    data = request.model_dump(exclude={"password", "email"})
    user = scope.add(User(
        **data,
        email=email,
        hashed_password=get_password_hash(request.password),
        email_confirmed=True
    ))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "user", user.id, user.name)

    await scope.commit()
    await scope.refresh(user)
    return user.to_dict()


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, request: UserUpdate, scope: TenantScope = Depends(get_scope)):
    user = await get_or_404(scope, User, user_id, NOT_FOUND)
    update_data = request.model_dump(exclude_unset=True)

    if "email" in update_data:
        update_data["email"] = update_data["email"].lower()
        if update_data["email"] != user.email and await _email_em_uso(scope, update_data["email"]):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email já cadastrado.")

    password = update_data.pop("password", None)
    if password:
        user.hashed_password = get_password_hash(password)

    apply_update(user, update_data)
    registrar_atividade(scope, ActivityAction.UPDATE, "user", user.id, user.name)

    await scope.commit()
    await scope.refresh(user)
    return user.to_dict()


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    scope: TenantScope = Depends(get_scope),
    admin: User = Depends(require_admin)
):
    """Remove usuario (apenas admin; nunca o proprio usuario)"""
    user = await get_or_404(scope, User, user_id, NOT_FOUND)

    if user.id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Você não pode excluir seu próprio usuário."
        )

    registrar_atividade(scope, ActivityAction.DELETE, "user", user.id, user.name)
    await scope.delete(user)
    await scope.commit()
    return {"success": True}
