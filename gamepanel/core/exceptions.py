"""Custom exceptions for the game panel.

Every error raised by the managers derives from PanelError. Callers map the
three concrete kinds onto their own responses (the HTTP layer uses 422, 409
and 404).
"""
from typing import Dict, List, Optional


class PanelError(Exception):
    """Base class for recoverable errors raised by the managers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PanelError):
    """Raised when one or more input fields fail their rules.

    Carries a field -> messages mapping so the caller can report every
    failing field at once.
    """

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message or "The given data was invalid.")
        self.errors = errors

    def __str__(self) -> str:
        fields = ", ".join(sorted(self.errors))
        return f"{self.message} ({fields})"


class ConflictError(PanelError):
    """Raised when a business-rule precondition is violated.

    Examples are a cross-service configuration parent, a chained script copy
    or deleting an option that still has servers.
    """


class NotFoundError(PanelError):
    """Raised when an identifier does not resolve to an existing record."""

    def __init__(self, resource: str, resource_id):
        super().__init__(f"{resource} with ID {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id
