#!/usr/bin/env python3
from gamepanel.core.database import Base
from .service import Service
from .service_option import ServiceOption
from .variable import Variable
from .server import Server, ServerVariable

__all__ = [
    "Base",
    "Service",
    "ServiceOption",
    "Variable",
    "Server",
    "ServerVariable",
]
