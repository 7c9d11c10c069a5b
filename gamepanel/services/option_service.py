#!/usr/bin/env python3
"""Business logic for service option management.

Options may inherit their configuration from another option of the same
service (config_from) and copy their install script from an option that does
not itself copy one (copy_script_from).
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, Tuple
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from gamepanel.core.exceptions import ValidationError, ConflictError, NotFoundError
from gamepanel.models.service_option import ServiceOption
from gamepanel.schemas.service_option import (
    CONFIG_FIELDS,
    ServiceOptionCreate,
    ServiceOptionUpdate,
    ServiceOptionScripts,
    OptionConfigurationResponse,
    OptionScriptResponse,
)
from gamepanel.services.service_service import ServiceService, service_service
from gamepanel.services.variable_service import VariableService, variable_service

logger = logging.getLogger(__name__)

CONFIG_PARENT_CONFLICT = "The `configuration from` directive must be a child of the assigned service."
CONFIG_PARENT_SELF = "A service option cannot inherit its configuration from itself."
SCRIPT_PARENT_CONFLICT = (
    "The service option selected to copy a script from either does not exist, "
    "or is copying from a higher level."
)
SCRIPT_PARENT_SELF = "A service option cannot copy its install script from itself."
SCRIPT_SOURCE_CONFLICT = (
    "This service option is the script source of other options and cannot copy a script itself."
)
SERVERS_ATTACHED = "You cannot delete a service option that has servers associated with it."
TAG_TAKEN = "The tag has already been taken."


def _schema_errors(exc: SchemaValidationError) -> Dict[str, List[str]]:
    """Flatten pydantic errors into a field -> messages mapping."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def _merge(errors: Dict[str, List[str]], more: Dict[str, List[str]]) -> None:
    for field, messages in more.items():
        errors.setdefault(field, []).extend(messages)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class OptionService:
    """Service layer for service option business logic.

    Holds no per-call state; the database session is passed to every call.
    """

    def __init__(
        self,
        services: Optional[ServiceService] = None,
        variables: Optional[VariableService] = None,
    ):
        self.services = services or service_service
        self.variables = variables or variable_service

    def _parse(
        self,
        schema: Type[BaseModel],
        data: Mapping[str, Any]
    ) -> Tuple[Optional[BaseModel], Dict[str, List[str]]]:
        """Run field-level rules, returning the parsed request or the errors."""
        try:
            return schema.model_validate(data), {}
        except SchemaValidationError as e:
            return None, _schema_errors(e)

    def _missing_config(
        self,
        values: Mapping[str, Any],
        parent_id: Any,
        stored: Optional[ServiceOption] = None
    ) -> Dict[str, List[str]]:
        """
        Check the config_* fields an option without a parent must carry.

        A field counts as present when the payload holds a value for it, or
        when the payload omits it and the stored option already has one.
        """
        if not _is_blank(parent_id):
            return {}

        errors = {}
        for field in CONFIG_FIELDS:
            if field in values:
                value = values[field]
            else:
                value = getattr(stored, field, None)
            if _is_blank(value):
                errors[field] = [f"The {field} field is required when config_from is not present."]
        return errors

    async def _tag_taken(self, db: AsyncSession, tag: str, ignore_id: Optional[int] = None) -> bool:
        query = select(ServiceOption.id).where(ServiceOption.tag == tag)
        if ignore_id is not None:
            query = query.where(ServiceOption.id != ignore_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def _save(self, db: AsyncSession, option: ServiceOption) -> None:
        """Flush pending changes, reporting a unique tag race as a validation error."""
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            if "tag" in str(e.orig).lower():
                raise ValidationError({"tag": [TAG_TAKEN]})
            raise
        await db.refresh(option)

    async def get_option(self, db: AsyncSession, option_id: int) -> ServiceOption:
        """
        Get service option by ID.

        Raises:
            NotFoundError: if no option has this ID
        """
        option = await db.get(ServiceOption, option_id)
        if option is None:
            raise NotFoundError("Service option", option_id)
        return option

    async def list_options(
        self,
        db: AsyncSession,
        service_id: Optional[int] = None
    ) -> List[ServiceOption]:
        """List options, optionally restricted to one service."""
        query = select(ServiceOption).order_by(ServiceOption.id)
        if service_id is not None:
            query = query.where(ServiceOption.service_id == service_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create_option(self, db: AsyncSession, data: Mapping[str, Any]) -> ServiceOption:
        """
        Create a new service option.

        Args:
            db: Database session
            data: Raw field map

        Returns:
            Created option

        Raises:
            ValidationError: if any field rule fails
            ConflictError: if config_from belongs to another service
        """
        request, errors = self._parse(ServiceOptionCreate, data)
        _merge(errors, self._missing_config(data, data.get("config_from")))
        if errors:
            raise ValidationError(errors)

        if not await self.services.service_exists(db, request.service_id):
            errors["service_id"] = ["The selected service_id is invalid."]
        if await self._tag_taken(db, request.tag):
            errors["tag"] = [TAG_TAKEN]

        parent = None
        if request.config_from is not None:
            parent = await db.get(ServiceOption, request.config_from)
            if parent is None:
                errors["config_from"] = ["The selected config_from is invalid."]
        if errors:
            raise ValidationError(errors)

        if parent is not None and parent.service_id != request.service_id:
            logger.warning(
                f"Rejected option '{request.tag}': config_from {parent.id} belongs to service {parent.service_id}"
            )
            raise ConflictError(CONFIG_PARENT_CONFLICT)

        option = ServiceOption(**request.model_dump(exclude_unset=True))
        db.add(option)
        await self._save(db, option)

        logger.info(f"Created service option: {option.id} ({option.tag})")
        return option

    async def update_option(
        self,
        db: AsyncSession,
        option_id: int,
        data: Mapping[str, Any]
    ) -> ServiceOption:
        """
        Update a service option.

        Only supplied fields are checked. A payload without config_from
        detaches the option from its parent, so clients must resend
        config_from to keep the inheritance.

        Raises:
            NotFoundError: if the option does not exist
            ValidationError: if any supplied field fails its rules
            ConflictError: if config_from is the option itself or belongs to another service
        """
        option = await self.get_option(db, option_id)

        request, errors = self._parse(ServiceOptionUpdate, data)
        if request is None:
            values = data
            parent_id = data.get("config_from")
        else:
            values = request.model_dump(exclude_unset=True)
            parent_id = request.config_from
        _merge(errors, self._missing_config(values, parent_id, stored=option))
        if errors:
            raise ValidationError(errors)

        if request.tag is not None and await self._tag_taken(db, request.tag, ignore_id=option.id):
            errors["tag"] = [TAG_TAKEN]

        parent = None
        if parent_id is not None and parent_id != option.id:
            parent = await db.get(ServiceOption, parent_id)
            if parent is None:
                errors["config_from"] = ["The selected config_from is invalid."]
        if errors:
            raise ValidationError(errors)

        if parent_id is not None and parent_id == option.id:
            raise ConflictError(CONFIG_PARENT_SELF)
        if parent is not None and parent.service_id != option.service_id:
            logger.warning(
                f"Rejected update of option {option.id}: config_from {parent.id} "
                f"belongs to service {parent.service_id}"
            )
            raise ConflictError(CONFIG_PARENT_CONFLICT)

        if option.config_from is not None and parent_id is None:
            logger.info(f"Service option {option.id}: config_from cleared (not present in update)")

        for field, value in values.items():
            setattr(option, field, value)
        option.config_from = parent_id

        await self._save(db, option)

        logger.info(f"Updated service option: {option.id} ({option.tag})")
        return option

    async def delete_option(self, db: AsyncSession, option_id: int) -> None:
        """
        Delete a service option and its variables in one transaction.

        Raises:
            NotFoundError: if the option does not exist
            ConflictError: if servers still use the option
        """
        result = await db.execute(
            select(ServiceOption)
            .options(
                selectinload(ServiceOption.variables),
                selectinload(ServiceOption.servers),
            )
            .where(ServiceOption.id == option_id)
            .execution_options(populate_existing=True)
        )
        option = result.scalar_one_or_none()
        if option is None:
            raise NotFoundError("Service option", option_id)

        if option.servers:
            logger.warning(f"Refused to delete service option {option_id}: {len(option.servers)} server(s) attached")
            raise ConflictError(SERVERS_ATTACHED)

        variable_ids = [variable.id for variable in option.variables]
        try:
            for variable_id in variable_ids:
                await self.variables.delete(db, variable_id)
            # Drop the stale collection so the option delete does not touch removed rows
            db.expire(option, ["variables"])
            await db.delete(option)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(f"Deleting service option {option_id} failed, changes rolled back")
            raise

        logger.info(f"Deleted service option: {option_id} ({len(variable_ids)} variable(s))")

    async def update_scripts(
        self,
        db: AsyncSession,
        option: ServiceOption,
        data: Mapping[str, Any]
    ) -> ServiceOption:
        """
        Update the install script of a loaded service option.

        script_install and copy_script_from are always replaced: a blank or
        missing value stores null. The remaining script fields only change
        when supplied.

        Raises:
            ValidationError: if a field fails its rules
            ConflictError: if copy_script_from is not a valid, first-level script source
        """
        request, errors = self._parse(ServiceOptionScripts, data)
        if errors:
            raise ValidationError(errors)

        source_id = request.copy_script_from
        if source_id is not None:
            if not isinstance(source_id, int) or isinstance(source_id, bool):
                logger.warning(f"Rejected script source {source_id!r} for service option {option.id}")
                raise ConflictError(SCRIPT_PARENT_CONFLICT)
            if source_id == option.id:
                raise ConflictError(SCRIPT_PARENT_SELF)

            result = await db.execute(
                select(ServiceOption.id).where(
                    ServiceOption.id == source_id,
                    ServiceOption.service_id == option.service_id,
                    ServiceOption.copy_script_from.is_(None),
                )
            )
            if result.scalar_one_or_none() is None:
                logger.warning(f"Rejected script source {source_id} for service option {option.id}")
                raise ConflictError(SCRIPT_PARENT_CONFLICT)

            result = await db.execute(
                select(ServiceOption.id)
                .where(ServiceOption.copy_script_from == option.id)
                .limit(1)
            )
            if result.scalar_one_or_none() is not None:
                raise ConflictError(SCRIPT_SOURCE_CONFLICT)

        option.script_install = request.script_install
        option.copy_script_from = source_id
        for field in ("script_is_privileged", "script_entry", "script_container"):
            if field in request.model_fields_set:
                setattr(option, field, getattr(request, field))

        await self._save(db, option)

        logger.info(f"Updated scripts for service option: {option.id}")
        return option

    async def resolve_configuration(
        self,
        db: AsyncSession,
        option: ServiceOption,
        max_depth: int = 10
    ) -> OptionConfigurationResponse:
        """
        Get the effective configuration of an option.

        Each config_* field keeps its own value when set, otherwise it takes
        the value of the nearest option up the config_from chain.
        """
        values = {field: getattr(option, field) for field in CONFIG_FIELDS}
        inherited = []
        visited = {option.id}
        current_id = option.config_from
        depth = 0

        while current_id and depth < max_depth and any(v is None for v in values.values()):
            if current_id in visited:
                logger.warning(f"Cycle in config_from chain of service option {option.id}")
                break
            visited.add(current_id)

            parent = await db.get(ServiceOption, current_id)
            if parent is None:
                break

            for field in CONFIG_FIELDS:
                if values[field] is None and getattr(parent, field) is not None:
                    values[field] = getattr(parent, field)
                    inherited.append(field)

            current_id = parent.config_from
            depth += 1

        return OptionConfigurationResponse(
            option_id=option.id,
            config_from=option.config_from,
            inherited=inherited,
            **values
        )

    async def resolve_install_script(
        self,
        db: AsyncSession,
        option: ServiceOption
    ) -> OptionScriptResponse:
        """Get the install script an option runs, following copy_script_from one level."""
        source = option
        if option.copy_script_from is not None:
            parent = await db.get(ServiceOption, option.copy_script_from)
            if parent is not None:
                source = parent

        return OptionScriptResponse(
            option_id=option.id,
            copy_script_from=option.copy_script_from,
            script_install=source.script_install,
            script_is_privileged=source.script_is_privileged,
            script_entry=source.script_entry,
            script_container=source.script_container,
        )


# Singleton instance
option_service = OptionService()
