"""Helpers that read fields from Kubernetes objects held as plain mappings."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

_FRACTION_RE = re.compile(r"\.(\d+)")


def extract_field(obj: Mapping[str, Any] | None, path: str) -> Any:
    """Follow a dot-separated path through nested mappings; None if any step is missing."""
    if obj is None or path == "":
        return None
    *parents, last = path.split(".")
    current: Any = obj
    for part in parents:
        current = current.get(part)
        if not isinstance(current, Mapping):
            return None
    return current.get(last)


def parse_timestamp(value: Any) -> datetime | None:
    """Turn an RFC 3339 string or a datetime into an aware datetime; None stays None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        text = value.strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        moment = datetime.fromisoformat(text)
    else:
        raise TypeError(f"cannot read a timestamp from {type(value).__name__}")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _metadata(obj: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if obj is None:
        return {}
    return obj.get("metadata") or {}


def extract_creation_timestamp(obj: Mapping[str, Any] | None) -> int:
    """Creation time in Unix seconds, or 0 when unset."""
    moment = parse_timestamp(_metadata(obj).get("creationTimestamp"))
    if moment is None:
        return 0
    return math.floor(moment.timestamp())


def extract_labels(obj: Mapping[str, Any] | None) -> dict[str, str] | None:
    """The object's labels, or None."""
    return _metadata(obj).get("labels")


def extract_annotations(obj: Mapping[str, Any] | None) -> dict[str, str] | None:
    """The object's annotations, or None."""
    return _metadata(obj).get("annotations")


def extract_name(obj: Mapping[str, Any] | None) -> str:
    """The object's name, or an empty string."""
    return _metadata(obj).get("name") or ""


def extract_namespace(obj: Mapping[str, Any] | None) -> str:
    """The object's namespace, or an empty string."""
    return _metadata(obj).get("namespace") or ""


def extract_generation(obj: Mapping[str, Any] | None) -> int:
    """The object's generation, or 0."""
    return int(_metadata(obj).get("generation") or 0)


def extract_uid(obj: Mapping[str, Any] | None) -> str:
    """The object's UID, or an empty string."""
    return str(_metadata(obj).get("uid") or "")


def extract_resource_version(obj: Mapping[str, Any] | None) -> str:
    """The object's resource version, or an empty string."""
    return str(_metadata(obj).get("resourceVersion") or "")


def extract_deletion_timestamp(obj: Mapping[str, Any] | None) -> datetime | None:
    """When deletion was requested, or None."""
    return parse_timestamp(_metadata(obj).get("deletionTimestamp"))


def extract_finalizers(obj: Mapping[str, Any] | None) -> list[str] | None:
    """The object's finalizers, or None."""
    return _metadata(obj).get("finalizers")


def is_being_deleted(obj: Mapping[str, Any] | None) -> bool:
    """True when the object carries a deletion timestamp."""
    return _metadata(obj).get("deletionTimestamp") is not None


def get_owner_reference_info(obj: Mapping[str, Any] | None) -> tuple[str, str]:
    """Kind and name of the first owner reference, or two empty strings."""
    owners = _metadata(obj).get("ownerReferences") or []
    if not owners:
        return "", ""
    first = owners[0]
    return first.get("kind", ""), first.get("name", "")


def should_include_namespace(namespaces: list[str] | None, namespace: str) -> bool:
    """An empty filter admits every namespace; otherwise only listed ones."""
    return not namespaces or namespace in namespaces