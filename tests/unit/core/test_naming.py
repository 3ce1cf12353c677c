"""
Unit tests for environment variable name derivation.
"""

import pytest

from envconf.core.naming import to_env_var_name, to_snake_case


class TestToSnakeCase:
    """Tests for to_snake_case."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("ApiPort", "Api_Port"),
            ("apiPort", "api_Port"),
            ("APIPort", "API_Port"),
            ("CountryPrefixMap", "Country_Prefix_Map"),
            ("Level2", "Level2"),
            ("api_port", "api_port"),
        ],
    )
    def test_word_boundaries(self, name: str, expected: str) -> None:
        """Test that camel humps and acronym boundaries become underscores."""
        assert to_snake_case(name) == expected

    def test_case_is_preserved(self) -> None:
        """Test that no case folding happens before uppercasing."""
        assert to_snake_case("srvShortName") == "srv_Short_Name"


class TestToEnvVarName:
    """Tests for to_env_var_name."""

    @pytest.mark.parametrize(
        "name", ["ApiPort", "apiPort", "APIPort", "api_port"],
    )
    def test_acronyms_stay_single_segment(self, name: str) -> None:
        """Test that camelCase, PascalCase and acronym names all map to one variable."""
        assert to_env_var_name(name, "MYAPP") == "MYAPP_API_PORT"

    def test_prefix_is_joined_with_underscore(self) -> None:
        """Test prefix concatenation."""
        assert to_env_var_name("ServiceEnv", "APP") == "APP_SERVICE_ENV"

    def test_nested_prefix(self) -> None:
        """Test that a derived name can itself be used as a prefix."""
        nested = to_env_var_name("Nested", "MYAPP")
        level2 = to_env_var_name("Level2", nested)
        assert to_env_var_name("Count", level2) == "MYAPP_NESTED_LEVEL2_COUNT"

    def test_output_is_uppercase(self) -> None:
        """Test the result contains no lowercase letters."""
        name = to_env_var_name("httpServerTLSCertPath", "svc")
        assert name == "svc_HTTP_SERVER_TLS_CERT_PATH"
        assert name[4:] == name[4:].upper()

    def test_empty_prefix(self) -> None:
        """Test that an empty prefix still yields a leading underscore."""
        assert to_env_var_name("Port", "") == "_PORT"
