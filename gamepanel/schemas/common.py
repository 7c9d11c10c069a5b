#!/usr/bin/env python3
from pydantic import BaseModel
from typing import Optional, Any


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: ErrorDetail

    @classmethod
    def build(cls, code: str, message: str, details: Any = None) -> dict:
        """Build the dict used as an HTTPException detail."""
        return cls(error=ErrorDetail(code=code, message=message, details=details)).model_dump()
