"""
Obras ERP - Tenant Scope
Acesso a dados sempre filtrado pela empresa do usuario autenticado

Servicos e rotas recebem um TenantScope em vez de (session, company_id):
nao existe caminho para montar uma consulta sem o filtro de empresa.
"""
import logging
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Type

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

logger = logging.getLogger(__name__)


class TenantScope:
    """Sessao do banco amarrada a uma company_id"""

    def __init__(self, db: AsyncSession, company_id: str, user: Any = None):
        if not company_id:
            raise ValueError("TenantScope requires a company_id")
        self.db = db
        self.company_id = company_id
        self.user = user

    def select(self, model: Type, *criteria) -> Select:
        """SELECT do model ja filtrado pela empresa"""
        return select(model).where(model.company_id == self.company_id, *criteria)

    async def all(self, model: Type, *criteria, order_by: Optional[Sequence] = None, limit: Optional[int] = None) -> List:
        query = self.select(model, *criteria)
        if order_by is not None:
            query = query.order_by(*order_by)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def first(self, model: Type, *criteria, order_by: Optional[Sequence] = None):
        query = self.select(model, *criteria)
        if order_by is not None:
            query = query.order_by(*order_by)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def get(self, model: Type, entity_id: Optional[str]):
        """Busca por id dentro da empresa (None se for de outra empresa)"""
        if not entity_id:
            return None
        return await self.first(model, model.id == entity_id)

    async def count(self, model: Type, *criteria) -> int:
        result = await self.db.execute(
            select(func.count(model.id)).where(model.company_id == self.company_id, *criteria)
        )
        return result.scalar() or 0

    async def sum(self, column, *criteria) -> Decimal:
        """SUM de uma coluna numerica (0 quando nao ha linhas)"""
        model = column.class_
        result = await self.db.execute(
            select(func.coalesce(func.sum(column), 0)).where(model.company_id == self.company_id, *criteria)
        )
        value = result.scalar()
        return value if isinstance(value, Decimal) else Decimal(str(value or 0))

    def add(self, obj):
        """Adiciona registro carimbando a empresa"""
        obj.company_id = self.company_id
        self.db.add(obj)
        return obj

    async def flush(self):
        await self.db.flush()

    async def commit(self):
        """Confirma a unidade de trabalho da requisicao"""
        await self.db.commit()

    async def refresh(self, obj):
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj):
        if obj.company_id != self.company_id:
            raise PermissionError("Registro pertence a outra empresa")
        await self.db.delete(obj)

    async def update_where(self, model: Type, values: dict, *criteria) -> int:
        """UPDATE em massa filtrado pela empresa; retorna linhas afetadas"""
        result = await self.db.execute(
            update(model)
            .where(model.company_id == self.company_id, *criteria)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0
