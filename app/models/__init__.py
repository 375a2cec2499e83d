from .company import Company
from .user import User, UserRole
from .obra import Obra, ObraStatus, Etapa
from .cliente import Cliente, Fornecedor
from .compras import Cotacao, CotacaoStatus, ListaCompra, CompraStatus
from .financeiro import Lancamento, LancamentoTipo, LancamentoStatus, NotaFiscal, OPEN_STATUSES
from .medicao import Medicao, MedicaoStatus
from .acompanhamento import ComentarioObra, RelatorioSemanal
from .activity_log import ActivityLog, ActivityAction

__all__ = [
    "Company",
    "User",
    "UserRole",
    "Obra",
    "ObraStatus",
    "Etapa",
    "Cliente",
    "Fornecedor",
    "Cotacao",
    "CotacaoStatus",
    "ListaCompra",
    "CompraStatus",
    "Lancamento",
    "LancamentoTipo",
    "LancamentoStatus",
    "NotaFiscal",
    "OPEN_STATUSES",
    "Medicao",
    "MedicaoStatus",
    "ComentarioObra",
    "RelatorioSemanal",
    "ActivityLog",
    "ActivityAction"
]
