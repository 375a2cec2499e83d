from .auth import RegisterRequest, RegisterResponse, VerifyEmailRequest, LoginRequest, LoginResponse
from .user import UserCreate, UserUpdate, UserResponse
from .obra import ObraCreate, ObraUpdate, ObraResponse, EtapaCreate, EtapaUpdate, EtapaResponse
from .cadastros import (
    ClienteCreate,
    ClienteUpdate,
    ClienteResponse,
    FornecedorCreate,
    FornecedorUpdate,
    FornecedorResponse
)
from .compras import (
    CotacaoCreate,
    CotacaoUpdate,
    CotacaoReceberRequest,
    CotacaoResponse,
    ListaCompraCreate,
    ListaCompraUpdate,
    ListaCompraResponse
)
from .financeiro import (
    LancamentoCreate,
    LancamentoUpdate,
    LancamentoResponse,
    NotaFiscalCreate,
    NotaFiscalUpdate,
    NotaFiscalResponse
)
from .medicao import MedicaoCreate, MedicaoUpdate, MedicaoResponse
from .activity import ActivityLogCreate, ActivityLogResponse
from .acompanhamento import (
    ComentarioCreate,
    ComentarioUpdate,
    ComentarioResponse,
    RelatorioSemanalCreate,
    RelatorioSemanalUpdate,
    RelatorioSemanalResponse
)

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "VerifyEmailRequest",
    "LoginRequest",
    "LoginResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "ObraCreate",
    "ObraUpdate",
    "ObraResponse",
    "EtapaCreate",
    "EtapaUpdate",
    "EtapaResponse",
    "ClienteCreate",
    "ClienteUpdate",
    "ClienteResponse",
    "FornecedorCreate",
    "FornecedorUpdate",
    "FornecedorResponse",
    "CotacaoCreate",
    "CotacaoUpdate",
    "CotacaoReceberRequest",
    "CotacaoResponse",
    "ListaCompraCreate",
    "ListaCompraUpdate",
    "ListaCompraResponse",
    "LancamentoCreate",
    "LancamentoUpdate",
    "LancamentoResponse",
    "NotaFiscalCreate",
    "NotaFiscalUpdate",
    "NotaFiscalResponse",
    "MedicaoCreate",
    "MedicaoUpdate",
    "MedicaoResponse",
    "ComentarioCreate",
    "ComentarioUpdate",
    "ComentarioResponse",
    "RelatorioSemanalCreate",
    "RelatorioSemanalUpdate",
    "RelatorioSemanalResponse",
    "ActivityLogCreate",
    "ActivityLogResponse"
]
