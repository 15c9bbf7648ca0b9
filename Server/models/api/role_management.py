"""
RoleDesk Server - Role Management Form Models

Pydantic models bound to the role admin forms.
"""

import re
from pydantic import BaseModel, field_validator

ROLE_NAME_PATTERN = re.compile(r'^[A-Za-z_]+$')


class RoleForm(BaseModel):
    """Form model for creating a new role"""
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not 5 <= len(value) <= 50:
            raise ValueError("Role name must be between 5 and 50 characters")
        if not ROLE_NAME_PATTERN.match(value):
            raise ValueError("Role name may only contain letters and underscores")
        return value.upper()
