#!/usr/bin/env python3
"""API routes for services."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gamepanel.api.dependencies import get_db, get_service_service
from gamepanel.core.exceptions import NotFoundError
from gamepanel.schemas.common import ErrorResponse
from gamepanel.schemas.service import ServiceCreate, ServiceResponse
from gamepanel.services.service_service import ServiceService

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=List[ServiceResponse])
async def list_services(
    db: AsyncSession = Depends(get_db),
    services: ServiceService = Depends(get_service_service)
) -> List[ServiceResponse]:
    """List all services."""
    items = await services.list_services(db)
    return [ServiceResponse.model_validate(service) for service in items]


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    request: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    services: ServiceService = Depends(get_service_service)
) -> ServiceResponse:
    """Create a new service."""
    service = await services.create_service(db, request)
    return ServiceResponse.model_validate(service)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    services: ServiceService = Depends(get_service_service)
) -> ServiceResponse:
    """Get service by ID."""
    try:
        service = await services.get_service(db, service_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=ErrorResponse.build("NOT_FOUND", e.message))
    return ServiceResponse.model_validate(service)
