"""
Obras ERP - Main Application
Gestao de obras multi-empresa: etapas, medicoes, compras e financeiro
"""
import asyncio
import logging
import traceback
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.core import settings
from app.core.exceptions import DomainError
from app.core.error_notifier import notify_error_sync
from app.core.overdue_scheduler import run_overdue_scheduler
from app.core.rate_limit import limiter
from app.database import init_db
from app.api import (
    auth_router,
    users_router,
    obras_router,
    etapas_router,
    medicoes_router,
    clientes_router,
    fornecedores_router,
    cotacoes_router,
    lista_compras_router,
    lancamentos_router,
    notas_fiscais_router,
    comentarios_router,
    relatorios_router,
    activity_log_router,
    financeiro_router,
    alertas_router,
    relatorio_router
)

# Rate limiting
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle do aplicativo"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    await init_db()

    scheduler_task = None
    if settings.OVERDUE_SCHEDULER_ENABLED:
        scheduler_task = asyncio.create_task(run_overdue_scheduler())

    yield

    if scheduler_task:
        scheduler_task.cancel()
    logger.info("Shutting down...")


# Middleware de headers de seguranca
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adiciona headers de seguranca em todas as respostas"""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Respostas de autenticacao nunca vao para cache
        if request.url.path.startswith("/auth"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
            response.headers["Pragma"] = "no-cache"
        return response


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Construction management ERP (multi-company)",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Headers de seguranca (adicionar ANTES do CORS)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== ERROS ====================
# Todas as respostas de erro seguem o formato {"error": "<mensagem>"}

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Dados inválidos", "details": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(PermissionError)
async def permission_exception_handler(request: Request, exc: PermissionError):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    endpoint = f"{request.method} {request.url.path}"
    logger.exception(f"Erro nao tratado em {endpoint}: {exc}")

    notify_error_sync(
        error_type="API_ERROR",
        error_message=str(exc),
        error_details=traceback.format_exc(),
        endpoint=endpoint
    )

    message = str(exc) if settings.is_development else "Erro interno do servidor"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message}
    )


# Routers
app.include_router(auth_router)
app.include_router(users_router, prefix="/api")
app.include_router(obras_router, prefix="/api")
app.include_router(etapas_router, prefix="/api")
app.include_router(medicoes_router, prefix="/api")
app.include_router(clientes_router, prefix="/api")
app.include_router(fornecedores_router, prefix="/api")
app.include_router(cotacoes_router, prefix="/api")
app.include_router(lista_compras_router, prefix="/api")
app.include_router(lancamentos_router, prefix="/api")
app.include_router(notas_fiscais_router, prefix="/api")
app.include_router(comentarios_router, prefix="/api")
app.include_router(relatorios_router, prefix="/api")
app.include_router(activity_log_router, prefix="/api")
app.include_router(financeiro_router, prefix="/api")
app.include_router(alertas_router, prefix="/api")
app.include_router(relatorio_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
