"""Connection settings for the OpenSearch client handle.

All settings can be overridden via environment variables or by passing
values directly to ``load_settings``.
"""

import os
import re
from typing import Any, Self

from botocore.credentials import Credentials
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ENV_PREFIX = "ENTITY_SEARCH_"


class ConnectionSettings(BaseModel):
    """Connection, monitor and ingestion configuration for an OpenSearch cluster."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    host: str = "localhost"
    port: int = Field(default=9200, gt=0)
    use_ssl: bool = False
    verify_certs: bool = False
    user: str | None = None
    password: str | None = None
    region: str = "us-east-1"
    timeout: int = Field(default=60, gt=0)
    http_compress: bool = True

    monitor_interval: float = Field(default=10.0, gt=0)
    monitor_max_interval: float = Field(default=60.0, gt=0)
    monitor_jitter: float = Field(default=1.0, ge=0)

    bulk_chunk_size: int = Field(default=10_000, gt=0)

    # Only used for AWS domains (SigV4 signing)
    credentials: Credentials | None = Field(default=None, exclude=True, repr=False)

    @field_validator("host")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        """Accept URLs as well as bare host names."""
        host = re.sub(r"^https?://", "", v.strip()).rstrip("/")
        if not host:
            raise ValueError("host must not be empty")
        return host

    @model_validator(mode="after")
    def check_monitor_intervals(self) -> Self:
        if self.monitor_max_interval < self.monitor_interval:
            raise ValueError("monitor_max_interval must be >= monitor_interval")
        return self

    @property
    def is_aws_domain(self) -> bool:
        return ".es.amazonaws.com" in self.host or ".aoss.amazonaws.com" in self.host

    @property
    def http_auth(self) -> tuple[str, str] | None:
        if self.user and self.password:
            return (self.user, self.password)
        return None

    @property
    def hosts(self) -> list[dict[str, Any]]:
        """Return hosts list in the format expected by opensearch-py."""
        return [{"host": self.host, "port": self.port}]


# Setting name -> environment variable (without prefix)
ENV_VARS = {
    "host": "HOST",
    "port": "PORT",
    "use_ssl": "USE_SSL",
    "verify_certs": "VERIFY_CERTS",
    "user": "USER",
    "password": "PASSWORD",
    "region": "REGION",
    "timeout": "TIMEOUT",
    "http_compress": "HTTP_COMPRESS",
    "monitor_interval": "MONITOR_INTERVAL",
    "monitor_max_interval": "MONITOR_MAX_INTERVAL",
    "monitor_jitter": "MONITOR_JITTER",
    "bulk_chunk_size": "BULK_CHUNK_SIZE",
}


def load_settings(**overrides: Any) -> ConnectionSettings:
    """Build ConnectionSettings with env-var and keyword overrides.

    Resolution order (later wins):
      1. Model defaults
      2. Environment variables (``ENTITY_SEARCH_HOST``, ``ENTITY_SEARCH_PORT``, ...)
      3. Explicit keyword arguments

    Values coming from the environment are strings; pydantic coerces them
    ("9200" -> 9200, "true"/"false" -> bool) and rejects invalid ones.

    Raises:
        TypeError: If an override is not a known setting
        pydantic.ValidationError: If a value is invalid
    """
    values: dict[str, Any] = {}

    for name, env_var in ENV_VARS.items():
        value = os.getenv(f"{ENV_PREFIX}{env_var}")
        if value:
            values[name] = value

    for key, value in overrides.items():
        if key not in ConnectionSettings.model_fields:
            raise TypeError(f"Unknown setting: {key!r}")
        values[key] = value

    return ConnectionSettings(**values)
