#!/usr/bin/env python3
import logging
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from gamepanel.core.exceptions import NotFoundError
from gamepanel.models.service import Service
from gamepanel.schemas.service import ServiceCreate

logger = logging.getLogger(__name__)


class ServiceService:
    """Service layer for services (the parents of service options)."""

    async def get_service(self, db: AsyncSession, service_id: int) -> Service:
        """
        Get service by ID.

        Raises:
            NotFoundError: if no service has this ID
        """
        service = await db.get(Service, service_id)
        if service is None:
            raise NotFoundError("Service", service_id)
        return service

    async def service_exists(self, db: AsyncSession, service_id: int) -> bool:
        """Check whether a service with this ID exists."""
        result = await db.execute(select(Service.id).where(Service.id == service_id))
        return result.scalar_one_or_none() is not None

    async def list_services(self, db: AsyncSession) -> List[Service]:
        result = await db.execute(select(Service).order_by(Service.id))
        return list(result.scalars().all())

    async def create_service(self, db: AsyncSession, request: ServiceCreate) -> Service:
        """
        Create a new service.

        Args:
            db: Database session
            request: Service creation request

        Returns:
            Created service
        """
        service = Service(
            name=request.name,
            description=request.description,
            startup=request.startup,
        )
        db.add(service)
        await db.flush()
        await db.refresh(service)

        logger.info(f"Created service: {service.id} ({service.name})")
        return service


# Singleton instance
service_service = ServiceService()
