"""
namapp/schemas/principal.py
Roles, the verified Principal and the stored user record.
"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Role = Literal["admin", "developer", "unspecified"]


class Principal(BaseModel):
    id: str = Field(..., description="Firebase UID")
    email: Optional[str] = Field(None, description="E-mail (if any)")
    email_verified_at: Optional[datetime] = Field(None, description="Auth time of a verified e-mail token")


class UserRecord(BaseModel):
    id: str
    role: Role = "unspecified"

    @field_validator("role", mode="before")
    @classmethod
    def _known_role(cls, v: Any) -> str:
        # Unknown or missing roles never carry privileges
        if v in ("admin", "developer"):
            return v
        return "unspecified"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
