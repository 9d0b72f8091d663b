import pytest

from kubestatelogs.quantity import (
    Quantity,
    compare_quantities,
    convert_to_bytes,
    convert_to_millicores,
    extract_cpu,
    extract_ephemeral_storage,
    extract_memory,
    extract_resource_limits,
    extract_resource_map,
    extract_resource_quantity,
    extract_resource_quantity_as_float,
    extract_resource_quantity_as_int,
    extract_resource_requests,
    extract_specific_resource,
    extract_storage,
    is_zero_quantity,
    parse_quantity,
)


def test_canonical_decimal_forms():
    assert str(parse_quantity("1.5")) == "1500m"
    assert str(parse_quantity("1000m")) == "1"


def test_binary_suffix_value():
    assert parse_quantity("1Ki").value() == 1024
    assert str(parse_quantity("1Gi")) == "1Gi"


@pytest.mark.parametrize(
    "text", ["500m", "128Mi", "2", "1.5", "1536Mi", "1e3", "-2Ki", "0.5Ki", "3k", "100n", "0"]
)
def test_canonical_round_trip(text):
    quantity = parse_quantity(text)
    again = parse_quantity(str(quantity))
    assert quantity.cmp(again) == 0
    assert str(again) == str(quantity)


def test_whole_values():
    assert parse_quantity("2").value() == 2
    assert parse_quantity("250m").milli_value() == 250
    fraction = parse_quantity("100m")
    assert fraction.value() >= fraction.as_approximate_float()


@pytest.mark.parametrize("text", ["abc", "1.2.3", "1x", "Ki", "1e", " 1"])
def test_parse_rejects_malformed(text):
    assert parse_quantity(text) is None
    with pytest.raises(ValueError):
        Quantity.parse(text)


def test_parse_empty_is_none():
    assert parse_quantity("") is None


def test_compare():
    assert compare_quantities(None, None) == 0
    assert compare_quantities(None, "1") == -1
    assert compare_quantities("1", None) == 1
    assert compare_quantities("1Ki", "1024") == 0
    assert compare_quantities("1", "2") == -1
    assert compare_quantities("2", "1500m") == 1


def test_zero_checks():
    assert is_zero_quantity(None) is True
    assert is_zero_quantity("0") is True
    assert is_zero_quantity("1m") is False


def test_missing_quantity_defaults():
    assert extract_resource_quantity(None) == ""
    assert extract_resource_quantity_as_int(None) == 0
    assert extract_resource_quantity_as_float(None) == 0.0
    assert convert_to_bytes(None) == 0
    assert convert_to_millicores(None) == 0


def test_conversions_agree():
    gib = parse_quantity("1Gi")
    assert convert_to_bytes(gib) == gib.value()
    assert extract_resource_quantity_as_int(gib) == gib.value()
    assert extract_resource_quantity(gib) == str(gib)
    assert convert_to_millicores(parse_quantity("2")) == parse_quantity("2k").value()


def test_resource_map():
    resources = {"cpu": "500m", "memory": "128Mi"}
    assert extract_resource_map(resources) == resources
    assert extract_resource_map(None) is None
    assert extract_resource_map({}) == {}


def test_requests_and_limits():
    requirements = {"requests": {"cpu": "250m"}}
    assert extract_resource_requests(requirements) == {"cpu": "250m"}
    assert extract_resource_limits(requirements) is None
    assert extract_resource_requests(None) is None


def test_specific_resources():
    resources = {"cpu": "2", "storage": "10Gi", "ephemeral-storage": "1Gi"}
    assert extract_cpu(resources) == "2"
    assert extract_storage(resources) == "10Gi"
    assert extract_ephemeral_storage(resources) == "1Gi"
    assert extract_memory(resources) == ""
    assert extract_specific_resource(None, "cpu") == ""