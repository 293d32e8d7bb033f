"""Reading precomputed world diffs from JSON documents."""

from __future__ import annotations

from .schema import ClassPayload, DiffDocument, RemotePayload, ResourcePayload, WorldPayload
from .translator import DiffDocumentError, load_world_diff, parse_world_diff

__all__ = [
    "ClassPayload",
    "DiffDocument",
    "DiffDocumentError",
    "RemotePayload",
    "ResourcePayload",
    "WorldPayload",
    "load_world_diff",
    "parse_world_diff",
]
