"""
frontend/models.py

Pydantic schemas for data exchanged with the portfolio backend.
The client holds these as a transient, non-authoritative copy of server state.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator


def parse_technologies(text: Optional[str]) -> List[str]:
    """Split a comma-delimited technologies string into trimmed tags.

    Empty segments ("A,,B" or a trailing comma) are dropped.
    """
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


class Project(BaseModel):
    """A portfolio item as returned by the backend."""
    id: Union[int, str] = Field(..., description="Server-assigned identifier")
    title: str = Field(..., description="Project title")
    description: str = Field(..., description="Project description")
    technologies: Optional[str] = Field(None, description="Comma-delimited technologies")
    link: Optional[str] = Field(None, description="External project URL")
    created_at: Optional[int] = Field(None, alias="createdAt", description="Epoch millis")
    updated_at: Optional[int] = Field(None, alias="updatedAt", description="Epoch millis")

    @property
    def tags(self) -> List[str]:
        return parse_technologies(self.technologies)

    @property
    def has_link(self) -> bool:
        return bool(self.link)


class ProjectDraft(BaseModel):
    """Form draft submitted on create.

    Required-field checks belong to the form (see views.validate_draft);
    the draft itself accepts whatever the form holds.
    """
    title: str = ""
    description: str = ""
    technologies: str = ""
    link: str = ""

    @field_validator("title", "description", "technologies", "link", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Treat missing widget values as empty strings."""
        return "" if v is None else v

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "technologies": self.technologies,
            "link": self.link,
        }


class LoginResult(BaseModel):
    """Response of the authentication endpoint."""
    token: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    username: Optional[str] = None
    user_id: Optional[int] = Field(None, alias="userId")
