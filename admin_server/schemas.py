"""
Request bodies for the resource server API.
Server-controlled fields (id, key, secret, owner) are not part of the draft; if a
caller sends them anyway they are dropped during parsing.
"""
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admin_server.scopes import normalize_scopes

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ResourceServerDraft(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    contact_name: str | None = Field(default=None, max_length=255)
    contact_email: str | None = Field(default=None, max_length=255)
    thumbnail_url: str | None = None
    scopes: list[str] = Field(default_factory=list)
    # Version the caller last read; a mismatch on update is a conflict. None = skip the check.
    version: int | None = None

    @field_validator("scopes")
    @classmethod
    def _check_scopes(cls, v: list[str]) -> list[str]:
        return normalize_scopes(v)

    @field_validator("contact_email")
    @classmethod
    def _check_email(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        if not _EMAIL_RE.match(v):
            raise ValueError("not a valid email address")
        return v
