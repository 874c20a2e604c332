"""Unit tests for create_client."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest
from botocore.credentials import Credentials

from entity_search.exceptions import ConnectionRebuildError
from entity_search.opensearch.client import clone_client, create_client
from entity_search.opensearch.settings import ConnectionSettings


@pytest.mark.unit
class TestCreateClient:
    """Tests for the AsyncOpenSearch client factory."""

    @pytest.fixture
    def mock_async_opensearch(self) -> Generator[MagicMock, None, None]:
        with patch("entity_search.opensearch.client.AsyncOpenSearch") as mock_class:
            yield mock_class

    @pytest.fixture
    def mock_credentials(self) -> Credentials:
        return Credentials(
            access_key="test-access-key",
            secret_key="test-secret-key",
            token="test-token",
        )

    def test_local_cluster_with_basic_auth(self, mock_async_opensearch: MagicMock) -> None:
        settings = ConnectionSettings(host="localhost", port=9200, user="admin", password="admin")

        client = create_client(settings)

        assert client is mock_async_opensearch.return_value
        kwargs = mock_async_opensearch.call_args.kwargs
        assert kwargs["hosts"] == [{"host": "localhost", "port": 9200}]
        assert kwargs["http_auth"] == ("admin", "admin")
        assert kwargs["use_ssl"] is False
        assert kwargs["verify_certs"] is False
        assert kwargs["timeout"] == 60

    def test_aws_domain_is_signed(
        self, mock_async_opensearch: MagicMock, mock_credentials: Credentials
    ) -> None:
        settings = ConnectionSettings(
            host="search-test.eu-west-1.es.amazonaws.com",
            port=443,
            region="eu-west-1",
            credentials=mock_credentials,
        )

        with patch("entity_search.opensearch.client.AWSV4SignerAsyncAuth") as mock_auth:
            create_client(settings)

        mock_auth.assert_called_once_with(mock_credentials, "eu-west-1", "es")
        kwargs = mock_async_opensearch.call_args.kwargs
        assert kwargs["http_auth"] is mock_auth.return_value
        assert kwargs["use_ssl"] is True

    def test_serverless_domain_uses_aoss_service(
        self, mock_async_opensearch: MagicMock, mock_credentials: Credentials
    ) -> None:
        settings = ConnectionSettings(
            host="abc123.us-east-1.aoss.amazonaws.com",
            credentials=mock_credentials,
        )

        with patch("entity_search.opensearch.client.AWSV4SignerAsyncAuth") as mock_auth:
            create_client(settings)

        assert mock_auth.call_args.args[2] == "aoss"

    def test_aws_domain_without_credentials_is_not_signed(
        self, mock_async_opensearch: MagicMock
    ) -> None:
        settings = ConnectionSettings(host="search-test.us-east-1.es.amazonaws.com")

        with patch("entity_search.opensearch.client.AWSV4SignerAsyncAuth") as mock_auth:
            create_client(settings)

        mock_auth.assert_not_called()
        assert mock_async_opensearch.call_args.kwargs["http_auth"] is None


@pytest.mark.unit
class TestCloneClient:
    """Tests for rebuilding a client from an existing one."""

    def test_reuses_transport_configuration(self) -> None:
        hosts = [{"host": "localhost", "port": 9200}]
        client = MagicMock()
        client.transport.hosts = hosts
        client.transport.kwargs = {"use_ssl": True, "timeout": 30}

        with patch("entity_search.opensearch.client.AsyncOpenSearch") as mock_class:
            clone = clone_client(client)

        assert clone is mock_class.return_value
        mock_class.assert_called_once_with(
            hosts=hosts,
            connection_class=client.transport.connection_class,
            use_ssl=True,
            timeout=30,
        )

    def test_client_without_hosts_raises(self) -> None:
        client = MagicMock()
        client.transport.hosts = []
        client.transport.kwargs = {}

        with pytest.raises(ConnectionRebuildError):
            clone_client(client)
