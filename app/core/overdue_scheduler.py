"""
Obras ERP - Overdue Scheduler
Job em background que marca lancamentos vencidos como Atrasado

Roda a cada OVERDUE_SCHEDULER_INTERVAL_SECONDS para todas as empresas.
A listagem de lancamentos continua executando a mesma atualizacao antes
de ler, entao o job so antecipa o status para relatorios e alertas.
"""
import asyncio
import logging
import traceback
from datetime import date, datetime
from typing import Optional

from sqlalchemy import select

from app.core.config import settings
from app.core.error_notifier import notify_error_sync
from app.core.tenancy import TenantScope
from app.database import AsyncSessionLocal
from app.models import Company
from app.services.financeiro import atualizar_lancamentos_atrasados

logger = logging.getLogger(__name__)


async def process_company(db, company_id: str, today: Optional[date] = None) -> int:
    """Atualiza uma empresa; falha de uma nao impede as demais"""
    try:
        scope = TenantScope(db, company_id)
        changed = await atualizar_lancamentos_atrasados(scope, today)
        await db.commit()
        return changed
    except Exception as e:
        await db.rollback()
        logger.error(f"[OVERDUE-SCHEDULER] Erro ao processar empresa {company_id}: {e}")
        notify_error_sync(
            error_type="SCHEDULER_ERROR",
            error_message=str(e),
            error_details=traceback.format_exc(),
            company_id=company_id
        )
        return 0


async def run_once(today: Optional[date] = None) -> int:
    """Uma passada por todas as empresas; retorna total de lancamentos alterados"""
    total = 0
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(Company.id))
        company_ids = list(result.scalars().all())

        for company_id in company_ids:
            total += await process_company(db, company_id, today)

    return total


async def run_overdue_scheduler():
    """Loop principal (cancelado pelo lifespan no shutdown)"""
    interval = settings.OVERDUE_SCHEDULER_INTERVAL_SECONDS
    logger.info(f"[OVERDUE-SCHEDULER] Iniciado (intervalo {interval}s)")

    check_count = 0

    while True:
        try:
            check_count += 1
            changed = await run_once()
            if changed or check_count % 24 == 1:
                logger.info(
                    f"[OVERDUE-SCHEDULER] Verificacao #{check_count} - "
                    f"{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}: {changed} lancamento(s) atrasado(s)"
                )
        except Exception as e:
            logger.error(f"[OVERDUE-SCHEDULER] Erro no loop do scheduler: {e}")

        await asyncio.sleep(interval)
