"""
Tests for ReshapeSettings and their effect on reshape().
"""

import pytest
from pydantic import ValidationError

from reshaper import ReshapeSettings, reshape
from reshaper.exceptions import MatchNotFound
from reshaper.settings import coerce_settings

PEOPLE = [
    {"name": "Joel", "info": {"age": 23, "lastName": "Auterson"}},
    {"name": "Jake", "info": {"age": 24, "lastName": "Hall"}},
]


class TestReshapeSettingsModel:
    """Pydantic model parsing."""

    def test_defaults(self):
        settings = ReshapeSettings.default()
        assert settings.key_hints is True
        assert settings.sticky_keys is True
        assert settings.max_depth is None

    def test_from_yaml(self):
        settings = ReshapeSettings.from_yaml({"max_depth": 3, "sticky_keys": False})
        assert settings.max_depth == 3
        assert settings.sticky_keys is False

    def test_from_yaml_empty(self):
        assert ReshapeSettings.from_yaml(None) == ReshapeSettings()
        assert ReshapeSettings.from_yaml({}) == ReshapeSettings()

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ReshapeSettings.from_yaml({"depth": 3})

    def test_rejects_negative_depth(self):
        with pytest.raises(ValidationError):
            ReshapeSettings(max_depth=-1)

    def test_coerce(self):
        settings = ReshapeSettings(max_depth=2)
        assert coerce_settings(settings) is settings
        assert coerce_settings({"max_depth": 2}) == settings
        assert coerce_settings(None) == ReshapeSettings()


class TestSettingsInReshape:
    """Options change how the engine searches."""

    def test_key_hints_disabled(self):
        schema = {"lastName": ["String"]}
        assert reshape(PEOPLE, schema) == {"lastName": ["Auterson", "Hall"]}
        assert reshape(PEOPLE, schema, settings={"key_hints": False}) == {
            "lastName": ["Joel", "Jake"]
        }

    def test_sticky_keys_disabled(self):
        data = [{"a": 1, "b": 2}, {"b": 3, "a": 4}]
        assert reshape(data, ["Number"]) == [1, 4]
        assert reshape(data, ["Number"], settings=ReshapeSettings(sticky_keys=False)) == [1, 3]

    def test_max_depth_limits_descent(self):
        assert reshape(PEOPLE, ["Number"], settings={"max_depth": 2}) == [23, 24]
        with pytest.raises(MatchNotFound):
            reshape(PEOPLE, ["Number"], settings={"max_depth": 1})
