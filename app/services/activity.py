"""
Obras ERP - Activity Log Service
"""
import logging
from typing import List, Optional

from app.core.config import settings
from app.core.tenancy import TenantScope
from app.models import ActivityLog, ActivityAction

logger = logging.getLogger(__name__)


def registrar_atividade(
    scope: TenantScope,
    action: ActivityAction,
    entity: str,
    entity_id: Optional[str] = None,
    entity_name: Optional[str] = None
) -> ActivityLog:
    """Adiciona entrada na trilha de auditoria (gravada junto com a operacao)"""
    user = scope.user
    log = scope.add(ActivityLog(
        user_id=getattr(user, "id", None),
        user_name=getattr(user, "name", "") or "",
        action=action.value if isinstance(action, ActivityAction) else action,
        entity=entity,
        entity_id=entity_id,
        entity_name=(entity_name or "")[:255],
    ))
    logger.debug(f"Activity: {log.action} {entity} {entity_id} by {log.user_id}")
    return log


async def listar_atividades(scope: TenantScope, limit: Optional[int] = None) -> List[ActivityLog]:
    """Mais recentes primeiro, limitado a ACTIVITY_LOG_LIMIT"""
    limit = min(limit or settings.ACTIVITY_LOG_LIMIT, settings.ACTIVITY_LOG_LIMIT)
    return await scope.all(ActivityLog, order_by=[ActivityLog.timestamp.desc()], limit=limit)
