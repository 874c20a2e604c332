"""Schemaless document model."""

from pydantic import BaseModel, ConfigDict


class Document(BaseModel):
    """A document with arbitrary fields, for indexes without a dedicated model."""

    model_config = ConfigDict(extra="allow")
