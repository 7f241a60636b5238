"""Tagged result of normalizing one API payload.

``Ok`` carries the canonical records; ``EmptyRoot`` means the expected root key
was absent (or null); ``MalformedShape`` means the root exists but is not a list.
All three expose ``records`` so callers can treat them uniformly when they only
care about the collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    records: tuple
    skipped: int = 0


@dataclass(frozen=True)
class EmptyRoot:
    root_key: str
    records: tuple = field(default=())


@dataclass(frozen=True)
class MalformedShape:
    root_key: str
    found_type: str
    records: tuple = field(default=())


NormalizeResult = Union[Ok, EmptyRoot, MalformedShape]


def resolve_root(payload: Any, root_key: str) -> Any:
    """Follow a dotted root key (``data.regularizations``) through nested dicts."""
    node = payload
    for part in root_key.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def normalize_collection(
    payload: Any,
    root_key: str,
    convert: Callable[[dict], Optional[T]],
) -> NormalizeResult:
    """Run ``convert`` over every item under ``root_key``, preserving order.

    ``convert`` returns None for items missing their identity field; such items
    (and non-dict items) are dropped and counted in ``Ok.skipped``.
    """
    items = resolve_root(payload, root_key)
    if items is None:
        return EmptyRoot(root_key=root_key)
    if not isinstance(items, (list, tuple)):
        logger.warning("Payload root %r is %s, expected a list", root_key, type(items).__name__)
        return MalformedShape(root_key=root_key, found_type=type(items).__name__)

    records = []
    skipped = 0
    for item in items:
        rec = convert(item) if isinstance(item, dict) else None
        if rec is None:
            skipped += 1
            continue
        records.append(rec)
    return Ok(records=tuple(records), skipped=skipped)


def clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_number(value: Any, default: float = 0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
