#!/usr/bin/env python3
from pydantic import BaseModel
from typing import Optional


class VariableResponse(BaseModel):
    """Schema for an option variable."""
    id: int
    option_id: int
    name: str
    description: Optional[str]
    env_variable: str
    default_value: Optional[str]
    user_viewable: bool
    user_editable: bool
    rules: Optional[str]

    class Config:
        from_attributes = True
