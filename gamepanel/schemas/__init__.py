from .service_option import (
    ServiceOptionCreate,
    ServiceOptionUpdate,
    ServiceOptionScripts,
    ServiceOptionResponse,
    OptionConfigurationResponse,
    OptionScriptResponse,
)
from .service import ServiceCreate, ServiceResponse
from .variable import VariableResponse
from .health import HealthCheckResponse
from .common import ErrorResponse

__all__ = [
    "ServiceOptionCreate",
    "ServiceOptionUpdate",
    "ServiceOptionScripts",
    "ServiceOptionResponse",
    "OptionConfigurationResponse",
    "OptionScriptResponse",
    "ServiceCreate",
    "ServiceResponse",
    "VariableResponse",
    "HealthCheckResponse",
    "ErrorResponse",
]
