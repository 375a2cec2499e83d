from .auth import router as auth_router
from .users import router as users_router
from .obras import router as obras_router
from .etapas import router as etapas_router
from .medicoes import router as medicoes_router
from .cadastros import clientes_router, fornecedores_router
from .cotacoes import router as cotacoes_router
from .lista_compras import router as lista_compras_router
from .lancamentos import router as lancamentos_router
from .notas_fiscais import router as notas_fiscais_router
from .acompanhamento import comentarios_router, relatorios_router
from .activity_log import router as activity_log_router
from .financeiro import financeiro_router, alertas_router, relatorio_router

__all__ = [
    "auth_router",
    "users_router",
    "obras_router",
    "etapas_router",
    "medicoes_router",
    "clientes_router",
    "fornecedores_router",
    "cotacoes_router",
    "lista_compras_router",
    "lancamentos_router",
    "notas_fiscais_router",
    "comentarios_router",
    "relatorios_router",
    "activity_log_router",
    "financeiro_router",
    "alertas_router",
    "relatorio_router"
]
