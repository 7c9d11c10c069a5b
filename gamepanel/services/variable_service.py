#!/usr/bin/env python3
import logging
from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from gamepanel.core.exceptions import NotFoundError
from gamepanel.models.variable import Variable
from gamepanel.models.server import ServerVariable

logger = logging.getLogger(__name__)


class VariableService:
    """Service layer for service option variables."""

    async def list_variables(self, db: AsyncSession, option_id: int) -> List[Variable]:
        result = await db.execute(
            select(Variable)
            .where(Variable.option_id == option_id)
            .order_by(Variable.id)
        )
        return list(result.scalars().all())

    async def delete(self, db: AsyncSession, variable_id: int) -> None:
        """
        Delete a variable together with the values servers assigned to it.

        The caller owns the transaction; changes are flushed, not committed.

        Raises:
            NotFoundError: if the variable does not exist
        """
        variable = await db.get(Variable, variable_id)
        if variable is None:
            raise NotFoundError("Variable", variable_id)

        env_variable = variable.env_variable
        await db.execute(
            delete(ServerVariable).where(ServerVariable.variable_id == variable_id)
        )
        await db.delete(variable)
        await db.flush()

        logger.info(f"Deleted variable: {variable_id} ({env_variable})")


# Singleton instance
variable_service = VariableService()
