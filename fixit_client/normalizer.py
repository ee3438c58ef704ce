"""Response shape normalization.

The backend's endpoints never converged on one envelope. This module maps
every known variant onto two canonical shapes:

- list operations  -> ``Page(items, total, page, page_size, pages)``, or the
  bare entity when the body holds no recognizable collection
- entity operations -> the bare entity dict

Recognized list envelopes:
- bare list
- ``{success, data: [...], meta | pagination | total/page/limit/pages}``
- ``{data: [...], pagination: {...}}``
- ``{items: [...], total}``
- named collections: ``{tasks: [...], total, currentPage, itemsPerPage}``,
  ``{properties: [...]}``, ``{units: [...]}`` ...

Every operation declares its ShapeDescriptor once; normalization is a pure
function of the body and that descriptor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ShapeKind(str, Enum):
    """How an operation's response body should be interpreted."""

    LIST = "list"
    ENTITY = "entity"
    RAW = "raw"


@dataclass(frozen=True)
class ShapeDescriptor:
    """Per-operation response shape declaration."""

    kind: ShapeKind = ShapeKind.RAW
    collection_key: str | None = None
    entity_key: str | None = None

    @classmethod
    def list_of(cls, collection_key: str | None = None) -> ShapeDescriptor:
        return cls(kind=ShapeKind.LIST, collection_key=collection_key)

    @classmethod
    def entity(cls, entity_key: str | None = None) -> ShapeDescriptor:
        return cls(kind=ShapeKind.ENTITY, entity_key=entity_key)


RAW = ShapeDescriptor()
LIST = ShapeDescriptor.list_of()
ENTITY = ShapeDescriptor.entity()


class Page(BaseModel):
    """Canonical list result."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Any] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = Field(default=0, alias="pageSize")
    pages: int = 1


# Collection keys checked, in order, after the declared one.
_KNOWN_COLLECTION_KEYS = (
    "items",
    "data",
    "tasks",
    "properties",
    "units",
    "leases",
    "rents",
    "requests",
    "vendors",
    "users",
    "invites",
    "media",
    "messages",
    "notifications",
    "comments",
    "logs",
    "results",
)

_TOTAL_KEYS = ("total", "totalItems", "count")
_PAGE_KEYS = ("page", "currentPage")
_SIZE_KEYS = ("pageSize", "limit", "itemsPerPage")
_PAGES_KEYS = ("pages", "totalPages")


def unwrap_envelope(body: Any) -> tuple[Any, dict[str, Any]]:
    """Split a ``{success, data, meta}`` style body into ``(data, meta)``.

    Bodies without a ``data`` field are returned whole with empty meta.
    """
    if not isinstance(body, dict) or "data" not in body:
        return body, {}

    meta: dict[str, Any] = {"success": body.get("success") is not False}
    if "message" in body:
        meta["message"] = body["message"]
    for key in ("meta", "pagination"):
        if isinstance(body.get(key), dict):
            meta.update(body[key])
    for key in _TOTAL_KEYS + _PAGE_KEYS + _SIZE_KEYS + _PAGES_KEYS:
        if key in body and key not in meta:
            meta[key] = body[key]
    return body["data"], meta


def normalize_list(body: Any, descriptor: ShapeDescriptor = LIST) -> Page | Any:
    """Normalize any known list envelope into a Page.

    A body with no recognizable collection is treated as a single entity:
    it comes back unwrapped from its ``{success, data}`` envelope but
    otherwise unchanged, and a WARNING is logged.
    """
    if isinstance(body, list):
        return _build_page(body, {})

    items, meta = _locate_collection(body, descriptor.collection_key) if isinstance(body, dict) else (None, {})
    if items is None:
        logger.warning(
            "No collection found in list response (expected %r), returning it as a single entity",
            descriptor.collection_key or "items",
        )
        return normalize_entity(body)
    return _build_page(items, meta)


def normalize_entity(body: Any, descriptor: ShapeDescriptor = ENTITY) -> Any:
    """Unwrap the entity from ``{success, data}`` and an optional named key."""
    entity, _meta = unwrap_envelope(body)
    if descriptor.entity_key and isinstance(entity, dict) and descriptor.entity_key in entity:
        entity = entity[descriptor.entity_key]
    return entity


def normalize(body: Any, descriptor: ShapeDescriptor) -> Any:
    """Dispatch on the descriptor's kind."""
    if descriptor.kind is ShapeKind.LIST:
        return normalize_list(body, descriptor)
    if descriptor.kind is ShapeKind.ENTITY:
        return normalize_entity(body, descriptor)
    return body


def _locate_collection(
    body: dict[str, Any], collection_key: str | None
) -> tuple[list[Any] | None, dict[str, Any]]:
    data, meta = unwrap_envelope(body)

    # {success, data: {properties: [...], total}} nests one level deeper.
    if isinstance(data, dict) and data is not body:
        nested_items, nested_meta = _locate_collection(data, collection_key)
        if nested_items is not None:
            return nested_items, {**meta, **nested_meta}

    if isinstance(data, list):
        return data, meta

    keys = (collection_key,) if collection_key else ()
    for key in keys + _KNOWN_COLLECTION_KEYS:
        value = body.get(key)
        if isinstance(value, list):
            page_meta = {k: v for k, v in body.items() if k != key}
            for sub in ("meta", "pagination"):
                if isinstance(body.get(sub), dict):
                    page_meta.update(body[sub])
            return value, page_meta
    return None, {}


def _build_page(items: list[Any], meta: dict[str, Any]) -> Page:
    total = _first_int(meta, _TOTAL_KEYS, len(items))
    page = _first_int(meta, _PAGE_KEYS, 1)
    page_size = _first_int(meta, _SIZE_KEYS, len(items))
    pages = _first_int(meta, _PAGES_KEYS, None)
    if pages is None:
        pages = math.ceil(total / page_size) if page_size > 0 else 1
    return Page(items=list(items), total=total, page=page, page_size=page_size, pages=pages)


def _first_int(meta: dict[str, Any], keys: tuple[str, ...], default: int | None) -> int | None:
    for key in keys:
        value = meta.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return default
