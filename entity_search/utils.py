"""Utility functions shared by the CLI and applications."""

from typing import Any

import boto3
from botocore.credentials import Credentials
from botocore.exceptions import BotoCoreError, ClientError

from entity_search.exceptions import CredentialsError
from entity_search.logging import get_logger
from entity_search.opensearch.settings import ConnectionSettings, load_settings

logger = get_logger(__name__)


def get_aws_credentials(
    *,
    profile: str | None = None,
    assume_role: str | None = None,
    region: str = "us-east-1",
    role_session_name: str = "entity-search",
) -> Credentials:
    """Resolve AWS credentials for SigV4-signed OpenSearch requests.

    The boto3 default chain is used unless a profile is given. With
    ``assume_role`` the resolved identity assumes the role through STS and the
    temporary credentials are returned instead.

    Raises:
        CredentialsError: If no credentials are found or the role cannot be assumed
    """
    session = boto3.Session(profile_name=profile) if profile else boto3.Session()

    if not assume_role:
        credentials = session.get_credentials()
        if credentials is None:
            raise CredentialsError(
                "No AWS credentials found. Configure AWS credentials or use --profile or --assume-role.",
            )
        return credentials

    logger.info(f"Assuming role {assume_role} in {region}")
    try:
        response = session.client("sts", region_name=region).assume_role(
            RoleArn=assume_role,
            RoleSessionName=role_session_name,
        )
    except (BotoCoreError, ClientError) as e:
        raise CredentialsError(f"Failed to assume role {assume_role}: {e!s}") from e

    temporary = response["Credentials"]
    return Credentials(
        access_key=temporary["AccessKeyId"],
        secret_key=temporary["SecretAccessKey"],
        token=temporary["SessionToken"],
    )


def get_connection_settings(
    *,
    host: str | None = None,
    port: int | None = None,
    profile: str | None = None,
    assume_role: str | None = None,
    region: str | None = None,
    **overrides: Any,
) -> ConnectionSettings:
    """Build connection settings from command-line style arguments.

    Arguments left to None fall back to the environment and defaults. AWS
    credentials are only resolved when the host is an AWS domain.
    """
    values = {
        key: value
        for key, value in {"host": host, "port": port, "region": region, **overrides}.items()
        if value is not None
    }
    settings = load_settings(**values)

    if settings.is_aws_domain:
        settings.credentials = get_aws_credentials(
            profile=profile,
            assume_role=assume_role,
            region=settings.region,
        )

    return settings
