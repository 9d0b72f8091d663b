import logging
from datetime import timedelta

import pytest

from kubestatelogs.config import (
    Config,
    CRDConfig,
    ResourceConfig,
    parse_crd_configs,
    parse_duration,
    parse_namespace_list,
    parse_resource_configs,
    parse_resource_list,
    set_log_level,
)


@pytest.fixture
def restore_level():
    package_logger = logging.getLogger("kubestatelogs")
    previous = package_logger.level
    yield package_logger
    package_logger.setLevel(previous)


def test_parse_duration_compound():
    assert parse_duration("1h30m") == timedelta(hours=1, minutes=30)


def test_parse_duration_fraction_equals_whole_units():
    assert parse_duration("1.5h") == parse_duration("90m")


def test_parse_duration_sign_and_zero():
    assert parse_duration("-2s") == -parse_duration("2s")
    assert parse_duration("+2s") == parse_duration("2s")
    assert parse_duration("0") == timedelta(0)


def test_parse_duration_small_units_accumulate():
    assert parse_duration("1000ms") == parse_duration("1s")
    assert parse_duration("1000us") == parse_duration("1ms")


@pytest.mark.parametrize("text", ["", "5", "5x", "abc", "m", ".s", "1h "])
def test_parse_duration_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_parse_resource_list():
    assert parse_resource_list("") == []
    assert parse_resource_list("pods,services") == ["pods", "services"]


def test_parse_namespace_list():
    assert parse_namespace_list("") == []
    assert parse_namespace_list("default,kube-system") == ["default", "kube-system"]


def test_parse_resource_configs_documented_example():
    default = parse_duration("30s")
    configs = parse_resource_configs("deployments:5m,pods:1m,services:2m", default)
    assert [c.name for c in configs] == ["deployments", "pods", "services"]
    assert [c.interval for c in configs] == [
        parse_duration("5m"),
        parse_duration("1m"),
        parse_duration("2m"),
    ]


def test_parse_resource_configs_defaults_and_invalid():
    default = parse_duration("30s")
    configs = parse_resource_configs(" pods , nodes:bogus ,, a:b:c", default)
    assert configs == [ResourceConfig("pods", default), ResourceConfig("nodes", default)]


def test_parse_resource_configs_empty():
    assert parse_resource_configs("", timedelta(0)) == []


def test_parse_crd_configs():
    configs = parse_crd_configs("apps/v1:deployments:spec.replicas| spec.paused ,v1:pods,broken")
    assert configs == [
        CRDConfig("apps/v1", "deployments", ["spec.replicas", "spec.paused"]),
        CRDConfig("v1", "pods", []),
    ]
    assert parse_crd_configs("") == []


def test_get_resource_interval_falls_back():
    default = parse_duration("1m")
    config = Config(
        log_interval=default,
        resource_configs=[ResourceConfig("pods", parse_duration("10s"))],
    )
    assert config.get_resource_interval("pods") == parse_duration("10s")
    assert config.get_resource_interval("nodes") == default


def test_set_log_level_invalid():
    with pytest.raises(ValueError, match="invalid log level: loud"):
        set_log_level("loud")


@pytest.mark.parametrize(
    "name, expected",
    [("DEBUG", logging.DEBUG), ("info", logging.INFO), ("warn", logging.WARNING), ("error", logging.ERROR)],
)
def test_set_log_level_applies(restore_level, name, expected):
    result = set_log_level(name)
    assert result is None
    assert logging.getLogger("kubestatelogs").level == expected
    assert restore_level.isEnabledFor(expected) is True