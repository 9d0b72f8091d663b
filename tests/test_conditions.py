import pytest

from kubestatelogs.conditions import convert_condition_status, convert_core_condition_status


@pytest.mark.parametrize("convert", [convert_condition_status, convert_core_condition_status])
@pytest.mark.parametrize(
    "status, expected",
    [("True", True), ("False", False), ("Unknown", None), ("", None), ("true", None)],
)
def test_convert(convert, status, expected):
    assert convert(status) is expected