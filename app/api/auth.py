"""
Obras ERP - Auth API
Cadastro de empresa, confirmacao de email e login
"""
import logging
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import Company, User, UserRole
from app.schemas import (
    RegisterRequest,
    RegisterResponse,
    VerifyEmailRequest,
    LoginRequest,
    LoginResponse,
    UserResponse
)
from app.core import (
    verify_password,
    get_password_hash,
    create_access_token,
    generate_verification_token,
    settings
)
from app.core.email import email_service
from app.core.rate_limit import limiter
from app.api.deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _session_token(user: User) -> str:
    return create_access_token(data={
        "sub": user.id,
        "company_id": user.company_id,
        "email": user.email,
        "role": user.role,
        "name": user.name,
    })


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register(request: Request, payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Cria a empresa e seu primeiro usuario (admin)"""
    email = payload.email.lower()

    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email já cadastrado."
        )

    company = Company(
        name=payload.company_name or "Minha Empresa",
        cnpj=payload.company_cnpj or ""
    )
    db.add(company)
    await db.flush()

    user = User(
        company_id=company.id,
        name=payload.name,
        email=email,
        hashed_password=get_password_hash(payload.password),
        role=UserRole.ADMIN.value,
        email_confirmed=not settings.EMAIL_VERIFICATION_REQUIRED
    )

    if settings.EMAIL_VERIFICATION_REQUIRED:
        user.verification_token = generate_verification_token()
        user.verification_token_expires_at = datetime.utcnow() + timedelta(
            hours=settings.EMAIL_VERIFICATION_EXPIRE_HOURS
        )

    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info(f"Nova empresa cadastrada: {company.name} ({company.id}) - admin {user.email}")

    if settings.EMAIL_VERIFICATION_REQUIRED:
        sent = email_service.send_verification_email(user.email, user.name, user.verification_token)
        if not sent and settings.is_development:
            logger.info(
                f"Link de verificacao: {settings.FRONTEND_URL}/verify-email?token={user.verification_token}"
            )
        return RegisterResponse(
            message="Cadastro realizado com sucesso! Verifique seu email para ativar a conta."
        )

    return RegisterResponse(
        message="Cadastro realizado com sucesso!",
        token=_session_token(user),
        user=user.to_dict()
    )


@router.post("/verify-email")
async def verify_email(payload: VerifyEmailRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(User).where(User.verification_token == payload.token)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Token inválido ou expirado."
        )

    if user.verification_token_expires_at and user.verification_token_expires_at < datetime.utcnow():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Token expirado. Solicite um novo email de verificação."
        )

    user.email_confirmed = True
    user.verification_token = None
    user.verification_token_expires_at = None
    await db.commit()

    logger.info(f"Email confirmado: {user.email}")
    return {"message": "Email verificado com sucesso! Você já pode fazer login."}


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(request: Request, payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(User).where(User.email == payload.email.lower())
    )
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas."
        )

    if not user.email_confirmed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Por favor, verifique seu email antes de fazer login."
        )

    if not verify_password(payload.password, user.hashed_password):
        logger.warning(f"Senha incorreta para {user.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas."
        )

    user.last_login_at = datetime.utcnow()
    await db.commit()

    return LoginResponse(token=_session_token(user), user=user.to_dict())


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Retorna dados do usuario atual"""
    return user.to_dict()
