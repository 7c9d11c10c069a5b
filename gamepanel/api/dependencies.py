#!/usr/bin/env python3
from gamepanel.core.database import get_db
from gamepanel.services.option_service import option_service
from gamepanel.services.service_service import service_service
from gamepanel.services.variable_service import variable_service


async def get_option_service():
    """Dependency for getting the option service."""
    return option_service


async def get_service_service():
    """Dependency for getting the service service."""
    return service_service


async def get_variable_service():
    """Dependency for getting the variable service."""
    return variable_service


# Re-export get_db for convenience
__all__ = ["get_db", "get_option_service", "get_service_service", "get_variable_service"]
