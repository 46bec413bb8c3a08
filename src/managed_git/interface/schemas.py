"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class TagsResponse(BaseModel):
    """Tags in provider order (most recent first)."""

    tags: list[str]


class LatestTagResponse(BaseModel):
    tag: str


class GroupNode(BaseModel):
    """One node of a discovered structure."""

    name: str
    level: int
    is_top_level: bool
    has_children: bool
    components: list[GroupNode] = []


class StructureResponse(BaseModel):
    state: str
    components: list[GroupNode]


class ContentResponse(BaseModel):
    """Classified file content."""

    path: str
    kind: Literal["text", "json"]
    content: Any


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
