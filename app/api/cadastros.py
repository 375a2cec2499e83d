"""
Obras ERP - Clientes / Fornecedores API
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_

from app.models import Cliente, Fornecedor, ActivityAction
from app.schemas import (
    ClienteCreate,
    ClienteUpdate,
    ClienteResponse,
    FornecedorCreate,
    FornecedorUpdate,
    FornecedorResponse
)
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_exclusao_cliente, validar_exclusao_fornecedor

clientes_router = APIRouter(prefix="/clientes", tags=["Clientes"])
fornecedores_router = APIRouter(prefix="/fornecedores", tags=["Fornecedores"])

CLIENTE_NOT_FOUND = "Cliente não encontrado."
FORNECEDOR_NOT_FOUND = "Fornecedor não encontrado."


# ==================== CLIENTES ====================

@clientes_router.get("", response_model=List[ClienteResponse])
async def list_clientes(
    search: Optional[str] = Query(None),
    scope: TenantScope = Depends(get_scope)
):
    criteria = []
    if search:
        criteria.append(or_(
            Cliente.nome.ilike(f"%{search}%"),
            Cliente.cpf_cnpj.ilike(f"%{search}%")
        ))
    clientes = await scope.all(Cliente, *criteria, order_by=[Cliente.nome])
    return [c.to_dict() for c in clientes]


@clientes_router.get("/{cliente_id}", response_model=ClienteResponse)
async def get_cliente(cliente_id: str, scope: TenantScope = Depends(get_scope)):
    cliente = await get_or_404(scope, Cliente, cliente_id, CLIENTE_NOT_FOUND)
    return cliente.to_dict()


@clientes_router.post("", response_model=ClienteResponse, status_code=status.HTTP_201_CREATED)
async def create_cliente(request: ClienteCreate, scope: TenantScope = Depends(get_scope)):
    cliente = scope.add(Cliente(**request.model_dump()))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "cliente", cliente.id, cliente.nome)

    await scope.commit()
    await scope.refresh(cliente)
    return cliente.to_dict()


@clientes_router.put("/{cliente_id}", response_model=ClienteResponse)
async def update_cliente(cliente_id: str, request: ClienteUpdate, scope: TenantScope = Depends(get_scope)):
    cliente = await get_or_404(scope, Cliente, cliente_id, CLIENTE_NOT_FOUND)

    apply_update(cliente, request.model_dump(exclude_unset=True))
    registrar_atividade(scope, ActivityAction.UPDATE, "cliente", cliente.id, cliente.nome)

    await scope.commit()
    await scope.refresh(cliente)
    return cliente.to_dict()


@clientes_router.delete("/{cliente_id}")
async def delete_cliente(cliente_id: str, scope: TenantScope = Depends(get_scope)):
    cliente = await get_or_404(scope, Cliente, cliente_id, CLIENTE_NOT_FOUND)
    await validar_exclusao_cliente(scope, cliente)

    registrar_atividade(scope, ActivityAction.DELETE, "cliente", cliente.id, cliente.nome)
    await scope.delete(cliente)
    await scope.commit()
    return {"success": True}


# ==================== FORNECEDORES ====================

@fornecedores_router.get("", response_model=List[FornecedorResponse])
async def list_fornecedores(
    search: Optional[str] = Query(None),
    scope: TenantScope = Depends(get_scope)
):
    criteria = []
    if search:
        criteria.append(or_(
            Fornecedor.nome.ilike(f"%{search}%"),
            Fornecedor.cnpj.ilike(f"%{search}%")
        ))
    fornecedores = await scope.all(Fornecedor, *criteria, order_by=[Fornecedor.nome])
    return [f.to_dict() for f in fornecedores]


@fornecedores_router.get("/{fornecedor_id}", response_model=FornecedorResponse)
async def get_fornecedor(fornecedor_id: str, scope: TenantScope = Depends(get_scope)):
    fornecedor = await get_or_404(scope, Fornecedor, fornecedor_id, FORNECEDOR_NOT_FOUND)
    return fornecedor.to_dict()


@fornecedores_router.post("", response_model=FornecedorResponse, status_code=status.HTTP_201_CREATED)
async def create_fornecedor(request: FornecedorCreate, scope: TenantScope = Depends(get_scope)):
    fornecedor = scope.add(Fornecedor(**request.model_dump()))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "fornecedor", fornecedor.id, fornecedor.nome)

    await scope.commit()
    await scope.refresh(fornecedor)
    return fornecedor.to_dict()


@fornecedores_router.put("/{fornecedor_id}", response_model=FornecedorResponse)
async def update_fornecedor(
    fornecedor_id: str,
    request: FornecedorUpdate,
    scope: TenantScope = Depends(get_scope)
):
    fornecedor = await get_or_404(scope, Fornecedor, fornecedor_id, FORNECEDOR_NOT_FOUND)

    apply_update(fornecedor, request.model_dump(exclude_unset=True))
    registrar_atividade(scope, ActivityAction.UPDATE, "fornecedor", fornecedor.id, fornecedor.nome)

    await scope.commit()
    await scope.refresh(fornecedor)
    return fornecedor.to_dict()


@fornecedores_router.delete("/{fornecedor_id}")
async def delete_fornecedor(fornecedor_id: str, scope: TenantScope = Depends(get_scope)):
    fornecedor = await get_or_404(scope, Fornecedor, fornecedor_id, FORNECEDOR_NOT_FOUND)
    await validar_exclusao_fornecedor(scope, fornecedor_id)

    registrar_atividade(scope, ActivityAction.DELETE, "fornecedor", fornecedor.id, fornecedor.nome)
    await scope.delete(fornecedor)
    await scope.commit()
    return {"success": True}
