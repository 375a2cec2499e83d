"""
Obras ERP - Medicoes API
Pendente -> Aprovado -> Pago (pagamento gera lancamento)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.models import Medicao, MedicaoStatus, ActivityAction
from app.schemas import MedicaoCreate, MedicaoUpdate, MedicaoResponse
from app.core.tenancy import TenantScope
from app.api.deps import get_scope, get_or_404, apply_update
from app.services.activity import registrar_atividade
from app.services.guards import validar_obra
from app.services.workflows import aprovar_medicao, pagar_medicao

router = APIRouter(prefix="/medicoes", tags=["Medicoes"])

NOT_FOUND = "Medição não encontrada."


@router.get("", response_model=List[MedicaoResponse])
async def list_medicoes(
    obra_id: Optional[str] = Query(None, alias="obraId"),
    scope: TenantScope = Depends(get_scope)
):
    criteria = [Medicao.obra_id == obra_id] if obra_id else []
    medicoes = await scope.all(Medicao, *criteria, order_by=[Medicao.data_medicao.desc()])
    return [m.to_dict() for m in medicoes]


@router.get("/{medicao_id}", response_model=MedicaoResponse)
async def get_medicao(medicao_id: str, scope: TenantScope = Depends(get_scope)):
    medicao = await get_or_404(scope, Medicao, medicao_id, NOT_FOUND)
    return medicao.to_dict()


@router.post("", response_model=MedicaoResponse, status_code=status.HTTP_201_CREATED)
async def create_medicao(request: MedicaoCreate, scope: TenantScope = Depends(get_scope)):
    await validar_obra(scope, request.obra_id)

    medicao = scope.add(Medicao(**request.model_dump(), status=MedicaoStatus.PENDING.value))
    await scope.flush()
    registrar_atividade(scope, ActivityAction.CREATE, "medicao", medicao.id, medicao.descricao)

    await scope.commit()
    await scope.refresh(medicao)
    return medicao.to_dict()


@router.put("/{medicao_id}", response_model=MedicaoResponse)
async def update_medicao(medicao_id: str, request: MedicaoUpdate, scope: TenantScope = Depends(get_scope)):
    """Atualiza dados da medicao (status muda so pelas acoes aprovar/pagar)"""
    medicao = await get_or_404(scope, Medicao, medicao_id, NOT_FOUND)

    apply_update(medicao, request.model_dump(exclude_unset=True))
    registrar_atividade(scope, ActivityAction.UPDATE, "medicao", medicao.id, medicao.descricao)

    await scope.commit()
    await scope.refresh(medicao)
    return medicao.to_dict()


@router.post("/{medicao_id}/aprovar", response_model=MedicaoResponse)
async def aprovar(medicao_id: str, scope: TenantScope = Depends(get_scope)):
    medicao = await aprovar_medicao(scope, medicao_id)
    if not medicao:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    registrar_atividade(scope, ActivityAction.UPDATE, "medicao", medicao.id, medicao.descricao)
    await scope.commit()
    await scope.refresh(medicao)
    return medicao.to_dict()


@router.post("/{medicao_id}/pagar")
async def pagar(medicao_id: str, scope: TenantScope = Depends(get_scope)):
    """
    Paga a medicao e gera o lancamento.

    Medicao ja paga (ou inexistente) nao e erro de servidor: responde 400
    sem gravar nada, para o cliente nao gerar lancamento duplicado.
    """
    result = await pagar_medicao(scope, medicao_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Medição já paga ou não encontrada."
        )

    medicao, lancamento = result["medicao"], result["lancamento"]
    registrar_atividade(scope, ActivityAction.UPDATE, "medicao", medicao.id, medicao.descricao)
    registrar_atividade(scope, ActivityAction.CREATE, "lancamento", lancamento.id, lancamento.descricao)

    await scope.commit()
    await scope.refresh(medicao)
    await scope.refresh(lancamento)
    return {"medicao": medicao.to_dict(), "lancamento": lancamento.to_dict()}


@router.delete("/{medicao_id}")
async def delete_medicao(medicao_id: str, scope: TenantScope = Depends(get_scope)):
    medicao = await get_or_404(scope, Medicao, medicao_id, NOT_FOUND)

    registrar_atividade(scope, ActivityAction.DELETE, "medicao", medicao.id, medicao.descricao)
    await scope.delete(medicao)
    await scope.commit()
    return {"success": True}
