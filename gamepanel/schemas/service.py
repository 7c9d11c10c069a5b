#!/usr/bin/env python3
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ServiceCreate(BaseModel):
    """Schema for creating a service."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    startup: Optional[str] = None


class ServiceResponse(BaseModel):
    """Schema for service response."""
    id: int
    name: str
    description: Optional[str]
    startup: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
