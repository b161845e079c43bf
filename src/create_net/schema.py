"""Schemas for GitHub API payloads consumed by the template listing."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

__all__ = ["TemplateListing", "TemplateListings"]


class TemplateListing(BaseModel):
    """A repository that can be used as a project template."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Repository name, used as the template reference.")
    description: str | None = Field(None, description="Repository description shown next to the name.")


TemplateListings = TypeAdapter(List[TemplateListing])
