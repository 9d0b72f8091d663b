"""Runtime configuration and the parsers that build it from command-line strings."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from fractions import Fraction

PACKAGE_LOGGER = "kubestatelogs"

_log = logging.getLogger(__name__)

_UNIT_NANOS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_UNITS = "ns|us|µs|μs|ms|s|m|h"
_DURATION_RE = re.compile(rf"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:{_UNITS}))+")
_TERM_RE = re.compile(rf"(\d+\.?\d*|\.\d+)({_UNITS})")
_MAX_NANOS = 2**63 - 1

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class ResourceConfig:
    """Collection interval for one resource type."""

    name: str
    interval: timedelta


@dataclass
class CRDConfig:
    """A custom resource to collect, with extra fields to extract."""

    api_version: str
    resource: str
    custom_fields: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Top-level settings for the collector."""

    log_interval: timedelta = timedelta(0)
    resources: list[str] = field(default_factory=list)
    resource_configs: list[ResourceConfig] = field(default_factory=list)
    crds: list[CRDConfig] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)
    kubeconfig: str = ""

    def get_resource_interval(self, resource_name: str) -> timedelta:
        """Return the interval configured for a resource, or the default one."""
        for resource_config in self.resource_configs:
            if resource_config.name == resource_name:
                return resource_config.interval
        return self.log_interval


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h30m`` or ``250ms``; raise ValueError if malformed."""
    body = text[1:] if text[:1] in ("+", "-") else text
    negative = text.startswith("-")
    if body == "0":
        return timedelta(0)
    if not _DURATION_RE.fullmatch(text):
        raise ValueError(f"invalid duration {text!r}")
    total = sum(
        (Fraction(Decimal(number)) * _UNIT_NANOS[unit] for number, unit in _TERM_RE.findall(body)),
        Fraction(0),
    )
    nanos = int(total)
    if nanos > _MAX_NANOS:
        raise ValueError(f"invalid duration {text!r}: out of range")
    delta = timedelta(microseconds=nanos // 1000)
    return -delta if negative else delta


def parse_resource_list(resources: str) -> list[str]:
    """Split a comma-separated list of resource types."""
    if resources == "":
        return []
    return resources.split(",")


def parse_resource_configs(resource_configs: str, default_interval: timedelta) -> list[ResourceConfig]:
    """Parse ``name[:interval]`` pairs such as ``deployments:5m,pods:1m``."""
    configs: list[ResourceConfig] = []
    for pair in resource_configs.split(","):
        pair = pair.strip()
        if not pair:
            continue
        parts = pair.split(":")
        if len(parts) == 1:
            configs.append(ResourceConfig(parts[0].strip(), default_interval))
        elif len(parts) == 2:
            name = parts[0].strip()
            interval_text = parts[1].strip()
            try:
                interval = parse_duration(interval_text)
            except ValueError as exc:
                _log.warning(
                    "Invalid interval '%s' for resource '%s', using default: %s",
                    interval_text,
                    name,
                    exc,
                )
                interval = default_interval
            configs.append(ResourceConfig(name, interval))
    return configs


def parse_crd_configs(crd_configs: str) -> list[CRDConfig]:
    """Parse ``apiVersion:resource[:field|field]`` entries separated by commas."""
    configs: list[CRDConfig] = []
    for pair in crd_configs.split(","):
        pair = pair.strip()
        if not pair:
            continue
        parts = pair.split(":")
        if len(parts) < 2:
            continue
        custom_fields: list[str] = []
        if len(parts) > 2:
            fields_text = parts[2].strip()
            if fields_text:
                custom_fields = [item.strip() for item in fields_text.split("|")]
        configs.append(CRDConfig(parts[0].strip(), parts[1].strip(), custom_fields))
    return configs


def parse_namespace_list(namespaces: str) -> list[str]:
    """Split a comma-separated list of namespace names."""
    if namespaces == "":
        return []
    return namespaces.split(",")


def set_log_level(level: str) -> None:
    """Set the package log level from ``debug``, ``info``, ``warn`` or ``error``."""
    try:
        numeric = _LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"invalid log level: {level}") from None
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric)
    package_logger.debug("Debug logging enabled")