"""Unit tests for ConnectionSettings and load_settings."""

import pytest
from botocore.credentials import Credentials
from pydantic import ValidationError

from entity_search.opensearch.settings import ConnectionSettings, load_settings


@pytest.mark.unit
class TestConnectionSettings:
    """Tests for the ConnectionSettings model."""

    def test_defaults(self) -> None:
        settings = ConnectionSettings()

        assert settings.host == "localhost"
        assert settings.port == 9200
        assert settings.use_ssl is False
        assert settings.timeout == 60
        assert settings.monitor_interval == 10.0
        assert settings.monitor_max_interval == 60.0
        assert settings.bulk_chunk_size == 10_000
        assert settings.http_auth is None

    def test_host_scheme_is_stripped(self) -> None:
        settings = ConnectionSettings(host="https://search.example.com/")

        assert settings.host == "search.example.com"
        assert settings.hosts == [{"host": "search.example.com", "port": 9200}]

    def test_empty_host_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConnectionSettings(host="  ")

    def test_max_interval_below_interval_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConnectionSettings(monitor_interval=30, monitor_max_interval=10)

    def test_http_auth_requires_user_and_password(self) -> None:
        assert ConnectionSettings(user="admin").http_auth is None
        assert ConnectionSettings(user="admin", password="secret").http_auth == ("admin", "secret")

    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("search-test.us-east-1.es.amazonaws.com", True),
            ("abc123.us-east-1.aoss.amazonaws.com", True),
            ("localhost", False),
        ],
    )
    def test_is_aws_domain(self, host: str, expected: bool) -> None:
        assert ConnectionSettings(host=host).is_aws_domain is expected

    def test_credentials_are_not_serialized(self) -> None:
        settings = ConnectionSettings(
            credentials=Credentials(access_key="key", secret_key="secret"),
        )

        assert "credentials" not in settings.model_dump()


@pytest.mark.unit
class TestLoadSettings:
    """Tests for environment and keyword overrides."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENTITY_SEARCH_HOST", "opensearch.internal")
        monkeypatch.setenv("ENTITY_SEARCH_PORT", "9201")
        monkeypatch.setenv("ENTITY_SEARCH_USE_SSL", "true")
        monkeypatch.setenv("ENTITY_SEARCH_BULK_CHUNK_SIZE", "500")

        settings = load_settings()

        assert settings.host == "opensearch.internal"
        assert settings.port == 9201
        assert settings.use_ssl is True
        assert settings.bulk_chunk_size == 500

    def test_keyword_overrides_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENTITY_SEARCH_HOST", "opensearch.internal")

        settings = load_settings(host="other-host", port=443)

        assert settings.host == "other-host"
        assert settings.port == 443

    def test_unknown_override_raises(self) -> None:
        with pytest.raises(TypeError, match="Unknown setting"):
            load_settings(hostname="localhost")

    def test_invalid_environment_value_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENTITY_SEARCH_PORT", "not-a-port")

        with pytest.raises(ValidationError):
            load_settings()
