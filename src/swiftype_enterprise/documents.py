"""Validation and normalization of Content Source documents.

The API accepts a closed set of top-level fields. Any other field a caller
supplies is kept as searchable text by appending ``"key: value"`` lines to
the document body.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Union

from .errors import InvalidDocument

REQUIRED_TOP_LEVEL_KEYS = ("external_id", "url", "title", "body")
OPTIONAL_TOP_LEVEL_KEYS = ("created_at", "updated_at", "type")
CORE_TOP_LEVEL_KEYS = frozenset(REQUIRED_TOP_LEVEL_KEYS + OPTIONAL_TOP_LEVEL_KEYS)


def _key_to_str(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, Enum) and isinstance(key.value, str):
        return key.value
    return str(key)


def _value_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def stringify_keys(document: Mapping[Any, Any]) -> Dict[str, Any]:
    """Return a copy of ``document`` with every key coerced to ``str``.

    Iteration order is preserved. If two keys collapse to the same string the
    later one wins.
    """
    return {_key_to_str(k): v for k, v in document.items()}


def normalize_document(document: Mapping[Any, Any]) -> Dict[str, Any]:
    """Validate ``document`` and reshape it into the API's wire format.

    Raises InvalidDocument naming every missing required field. The input
    mapping is left untouched.
    """
    if not isinstance(document, Mapping):
        raise InvalidDocument(message=f"document must be a mapping, got {type(document).__name__}")
    doc = stringify_keys(document)
    missing = [k for k in REQUIRED_TOP_LEVEL_KEYS if k not in doc]
    if missing:
        raise InvalidDocument(missing)

    normalized: Dict[str, Any] = {}
    body_lines: List[str] = [doc.pop("body")]
    for key, value in doc.items():
        if key in CORE_TOP_LEVEL_KEYS:
            normalized[key] = value
        else:
            body_lines.append(f"{key}: {_value_to_str(value)}")
    normalized["body"] = "\n".join(_value_to_str(line) for line in body_lines)
    return normalized


def normalize_documents(
    documents: Union[Mapping[Any, Any], Iterable[Mapping[Any, Any]]],
) -> List[Dict[str, Any]]:
    """Normalize a batch; a single mapping is treated as a batch of one."""
    if isinstance(documents, Mapping):
        documents = [documents]
    elif isinstance(documents, (str, bytes)) or not isinstance(documents, Iterable):
        raise InvalidDocument(
            message=f"documents must be a mapping or a list of mappings, got {type(documents).__name__}"
        )
    return [normalize_document(d) for d in documents]
