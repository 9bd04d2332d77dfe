"""Tests for perch.routing.params: path converters."""

import pytest

from perch.errors import ConfigurationError
from perch.routing.params import CONVERTERS, converter_regex


class TestConverters:
    def test_all_types_registered(self) -> None:
        assert set(CONVERTERS) == {"str", "int", "float", "path"}

    @pytest.mark.parametrize(
        ("param_type", "value", "matches"),
        [
            ("str", "alice", True),
            ("str", "a/b", False),
            ("int", "42", True),
            ("int", "4x", False),
            ("float", "9.99", True),
            ("float", "10", True),
            ("float", "1.", False),
            ("path", "docs/api/index.html", True),
        ],
    )
    def test_regex(self, param_type: str, value: str, matches: bool) -> None:
        assert bool(converter_regex(param_type).match(value)) is matches

    def test_regex_is_cached(self) -> None:
        assert converter_regex("int") is converter_regex("int")

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Known converters: float, int, path, str"):
            converter_regex("uuid")
