#!/usr/bin/env python3
"""API routes for service option management."""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gamepanel.api.dependencies import get_db, get_option_service, get_variable_service
from gamepanel.core.exceptions import PanelError, ValidationError, NotFoundError
from gamepanel.schemas.common import ErrorResponse
from gamepanel.schemas.service_option import (
    ServiceOptionResponse,
    OptionConfigurationResponse,
    OptionScriptResponse,
)
from gamepanel.schemas.variable import VariableResponse
from gamepanel.services.option_service import OptionService
from gamepanel.services.variable_service import VariableService

router = APIRouter(prefix="/options", tags=["Service Options"])


def _http_error(error: PanelError) -> HTTPException:
    """Map a manager error onto the HTTP response the API documents."""
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=422,
            detail=ErrorResponse.build("VALIDATION_FAILED", error.message, error.errors)
        )
    if isinstance(error, NotFoundError):
        return HTTPException(
            status_code=404,
            detail=ErrorResponse.build("NOT_FOUND", error.message)
        )
    return HTTPException(
        status_code=409,
        detail=ErrorResponse.build("CONFLICT", error.message)
    )


@router.get("", response_model=List[ServiceOptionResponse])
async def list_options(
    service_id: Optional[int] = Query(None, description="Filter by service"),
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> List[ServiceOptionResponse]:
    """List service options.

    - **service_id**: Only return options of this service
    """
    items = await options.list_options(db, service_id=service_id)
    return [ServiceOptionResponse.model_validate(option) for option in items]


@router.post("", response_model=ServiceOptionResponse, status_code=201)
async def create_option(
    data: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> ServiceOptionResponse:
    """Create a new service option.

    - **service_id**, **name**, **description**, **tag**: required
    - **config_from**: option of the same service to inherit configuration from
    - **config_startup**, **config_stop**, **config_logs**, **config_files**: required without config_from

    Returns:
    - **422**: Field validation failed (details hold field -> messages)
    - **409**: config_from belongs to another service
    """
    try:
        option = await options.create_option(db, data)
    except PanelError as e:
        raise _http_error(e)
    return ServiceOptionResponse.model_validate(option)


@router.get("/{option_id}", response_model=ServiceOptionResponse)
async def get_option(
    option_id: int,
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> ServiceOptionResponse:
    """Get service option by ID."""
    try:
        option = await options.get_option(db, option_id)
    except PanelError as e:
        raise _http_error(e)
    return ServiceOptionResponse.model_validate(option)


@router.patch("/{option_id}", response_model=ServiceOptionResponse)
async def update_option(
    option_id: int,
    data: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> ServiceOptionResponse:
    """Update a service option.

    Omitting **config_from** removes an existing configuration parent.
    """
    try:
        option = await options.update_option(db, option_id, data)
    except PanelError as e:
        raise _http_error(e)
    return ServiceOptionResponse.model_validate(option)


@router.delete("/{option_id}", status_code=204)
async def delete_option(
    option_id: int,
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
):
    """Delete a service option and its variables.

    Returns:
    - **204 No Content**: Successfully deleted
    - **404 Not Found**: Service option not found
    - **409 Conflict**: Servers still use this option
    """
    try:
        await options.delete_option(db, option_id)
    except PanelError as e:
        raise _http_error(e)


@router.get("/{option_id}/configuration", response_model=OptionConfigurationResponse)
async def get_option_configuration(
    option_id: int,
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> OptionConfigurationResponse:
    """Get the effective configuration after config_from inheritance."""
    try:
        option = await options.get_option(db, option_id)
    except PanelError as e:
        raise _http_error(e)
    return await options.resolve_configuration(db, option)


@router.get("/{option_id}/scripts", response_model=OptionScriptResponse)
async def get_option_scripts(
    option_id: int,
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> OptionScriptResponse:
    """Get the install script the option runs, following copy_script_from."""
    try:
        option = await options.get_option(db, option_id)
    except PanelError as e:
        raise _http_error(e)
    return await options.resolve_install_script(db, option)


@router.patch("/{option_id}/scripts", response_model=ServiceOptionResponse)
async def update_option_scripts(
    option_id: int,
    data: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service)
) -> ServiceOptionResponse:
    """Update the install script of a service option.

    - **script_install**: script body, blank clears it
    - **copy_script_from**: option of the same service to copy the script from
    """
    try:
        option = await options.get_option(db, option_id)
        option = await options.update_scripts(db, option, data)
    except PanelError as e:
        raise _http_error(e)
    return ServiceOptionResponse.model_validate(option)


@router.get("/{option_id}/variables", response_model=List[VariableResponse])
async def list_option_variables(
    option_id: int,
    db: AsyncSession = Depends(get_db),
    options: OptionService = Depends(get_option_service),
    variables: VariableService = Depends(get_variable_service)
) -> List[VariableResponse]:
    """List the variables of a service option."""
    try:
        await options.get_option(db, option_id)
    except PanelError as e:
        raise _http_error(e)
    items = await variables.list_variables(db, option_id)
    return [VariableResponse.model_validate(variable) for variable in items]
