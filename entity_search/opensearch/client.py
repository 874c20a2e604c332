"""Client factory for the asyncio OpenSearch client."""

from opensearchpy import AsyncOpenSearch, AWSV4SignerAsyncAuth

from entity_search.exceptions import ConnectionRebuildError
from entity_search.logging import get_logger
from entity_search.opensearch.settings import ConnectionSettings

logger = get_logger(__name__)


def create_client(settings: ConnectionSettings) -> AsyncOpenSearch:
    """Create an AsyncOpenSearch client from settings.

    No request is made here; the connection is verified by the first probe
    of the connection manager.

    AWS domains are signed with SigV4 when credentials are provided (SSL is then
    forced on). Otherwise HTTP basic auth is used when user and password are set.

    Args:
        settings: Connection settings

    Returns:
        A configured AsyncOpenSearch instance
    """
    if settings.credentials is not None and settings.is_aws_domain:
        service = "aoss" if ".aoss.amazonaws.com" in settings.host else "es"
        http_auth = AWSV4SignerAsyncAuth(settings.credentials, settings.region, service)
        use_ssl = True
        verify_certs = True
    else:
        http_auth = settings.http_auth
        use_ssl = settings.use_ssl
        verify_certs = settings.verify_certs

    logger.debug(f"Creating OpenSearch client for {settings.host}:{settings.port}")

    return AsyncOpenSearch(
        hosts=settings.hosts,
        http_compress=settings.http_compress,
        http_auth=http_auth,
        use_ssl=use_ssl,
        verify_certs=verify_certs,
        ssl_assert_hostname=False,
        ssl_show_warn=False,
        timeout=settings.timeout,
    )


def clone_client(client: AsyncOpenSearch) -> AsyncOpenSearch:
    """Build a new AsyncOpenSearch client with the configuration of an existing one.

    Hosts, connection class and connection options (auth, SSL, timeout...)
    are read back from the client's transport.

    Raises:
        ConnectionRebuildError: If the client's transport configuration is unavailable
    """
    transport = getattr(client, "transport", None)
    hosts = getattr(transport, "hosts", None)
    options = getattr(transport, "kwargs", None)
    if not hosts or not isinstance(options, dict):
        raise ConnectionRebuildError("Cannot read the hosts and options of the OpenSearch client")

    logger.debug(f"Rebuilding OpenSearch client for {hosts}")

    return AsyncOpenSearch(hosts=hosts, connection_class=transport.connection_class, **options)
