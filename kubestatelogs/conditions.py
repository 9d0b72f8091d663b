"""Conversion of Kubernetes condition statuses to three-state booleans."""

from __future__ import annotations

_STATUS_VALUES = {"True": True, "False": False}


def convert_condition_status(status: str) -> bool | None:
    """Map ``"True"`` to True, ``"False"`` to False and anything else to None."""
    return _STATUS_VALUES.get(status)


def convert_core_condition_status(status: str) -> bool | None:
    """Map a core/v1 condition status the same way as :func:`convert_condition_status`."""
    return convert_condition_status(status)