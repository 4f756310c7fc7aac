import pytest

from mcp_jitsi_call.pageobjects.results import (
    ScriptResult,
    is_boolean,
    is_list,
    is_mapping,
    is_not_string,
    is_number,
)


@pytest.mark.parametrize("shape, raw", [
    (is_boolean, True),
    (is_boolean, False),
    (is_number, 0),
    (is_number, 3.5),
    (is_list, []),
    (is_mapping, {"bitrate": {}}),
    (is_not_string, None),
    (is_not_string, {}),
])
def test_matching_shapes_carry_the_value(shape, raw):
    result = ScriptResult.decode(raw, shape)
    assert result.ok
    assert result.value == raw
    assert result.error is None


def test_error_string_becomes_the_diagnostic():
    result = ScriptResult.decode("TypeError: x is undefined", is_mapping)
    assert not result.ok
    assert result.error == "TypeError: x is undefined"
    assert result.value_or({}) == {}


def test_booleans_are_not_numbers():
    result = ScriptResult.decode(True, is_number)
    assert not result.ok
    assert result.error == "unexpected bool: True"


def test_unexpected_shape_is_described():
    assert ScriptResult.decode(None, is_list).error == "unexpected NoneType: None"
    assert ScriptResult.decode([1], is_boolean).error == "unexpected list: [1]"


def test_strings_only_fail_is_not_string():
    assert not ScriptResult.decode("", is_not_string).ok
    assert ScriptResult.decode(False, is_not_string).ok
