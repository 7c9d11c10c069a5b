#!/usr/bin/env python3
"""Schemas for service option management.

The request schemas are the field-level rule set used by OptionService.
Rules that need the database (existence, uniqueness, same-service parents)
are applied by the service itself.
"""
import json
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional, List
from datetime import datetime

TAG_PATTERN = r'^[A-Za-z0-9]+$'

# Fields that must be present when an option does not inherit its configuration
CONFIG_FIELDS = ("config_startup", "config_stop", "config_logs", "config_files")
JSON_CONFIG_FIELDS = ("config_startup", "config_logs", "config_files")


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _ensure_json(value):
    if value is None:
        return value
    try:
        json.loads(value)
    except ValueError:
        raise ValueError("must be a valid JSON string")
    return value


class OptionConfigFields(BaseModel):
    """Configuration fields shared by create and update requests."""
    startup: Optional[str] = None

    config_from: Optional[int] = None
    config_startup: Optional[str] = None
    config_stop: Optional[str] = Field(None, max_length=255)
    config_logs: Optional[str] = None
    config_files: Optional[str] = None

    @field_validator(*CONFIG_FIELDS, 'startup', mode='before')
    @classmethod
    def blank_is_null(cls, v):
        """Treat blank strings as missing values."""
        return _blank_to_none(v)

    @field_validator(*JSON_CONFIG_FIELDS)
    @classmethod
    def config_is_json(cls, v):
        return _ensure_json(v)


class ServiceOptionCreate(OptionConfigFields):
    """Schema for creating a new service option."""
    service_id: int
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    tag: str = Field(..., min_length=1, max_length=60, pattern=TAG_PATTERN)
    docker_image: Optional[str] = Field(None, max_length=255)


class ServiceOptionUpdate(OptionConfigFields):
    """Schema for updating a service option (partial update).

    Fields typed without Optional may be omitted but not sent as null.
    """
    name: str = Field(None, min_length=1, max_length=255)
    description: str = Field(None, min_length=1)
    tag: str = Field(None, min_length=1, max_length=60, pattern=TAG_PATTERN)
    docker_image: str = Field(None, max_length=255)


class ServiceOptionScripts(BaseModel):
    """Schema for updating the install script of a service option."""
    script_install: Optional[str] = None
    # Left as given when not numeric; the manager treats it as an unknown option
    copy_script_from: Optional[Any] = None
    script_is_privileged: bool = None
    script_entry: str = Field(None, min_length=1, max_length=255)
    script_container: str = Field(None, min_length=1, max_length=255)

    @field_validator('script_install', mode='before')
    @classmethod
    def blank_script_is_null(cls, v):
        """An empty script clears the stored one."""
        return _blank_to_none(v)

    @field_validator('copy_script_from', mode='before')
    @classmethod
    def empty_copy_is_null(cls, v):
        """Empty selections ('', 0) mean no script parent.

        Numeric strings become ints; anything else is passed through as is.
        """
        if v in ("", 0, "0"):
            return None
        if isinstance(v, str):
            try:
                return int(v)
            except ValueError:
                return v
        return v


class ServiceOptionResponse(BaseModel):
    """Schema for service option response."""
    id: int
    service_id: int
    name: str
    description: str
    tag: str
    docker_image: Optional[str]
    startup: Optional[str]
    config_from: Optional[int]
    config_startup: Optional[str]
    config_stop: Optional[str]
    config_logs: Optional[str]
    config_files: Optional[str]
    script_install: Optional[str]
    script_is_privileged: bool
    script_entry: str
    script_container: str
    copy_script_from: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OptionConfigurationResponse(BaseModel):
    """Effective configuration of an option after inheritance is applied."""
    option_id: int
    config_from: Optional[int]
    config_startup: Optional[str]
    config_stop: Optional[str]
    config_logs: Optional[str]
    config_files: Optional[str]
    # Names of the config_* fields taken from an ancestor
    inherited: List[str] = Field(default_factory=list)


class OptionScriptResponse(BaseModel):
    """Effective install script of an option after copy_script_from is applied."""
    option_id: int
    copy_script_from: Optional[int]
    script_install: Optional[str]
    script_is_privileged: bool
    script_entry: str
    script_container: str
