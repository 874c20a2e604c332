"""Paginated result model."""

import math
from typing import Generic, Self, TypeVar

from pydantic import BaseModel, Field, computed_field, model_validator

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a paginated query.

    Derived per call from a count and a windowed search; never persisted.
    """

    page: int = Field(ge=1)
    size: int = Field(gt=0)
    total_count: int = Field(ge=0)
    items: list[T] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_items_fit_page(self) -> Self:
        if len(self.items) > self.size:
            raise ValueError(f"Page holds {len(self.items)} items but size is {self.size}")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pages_count(self) -> int:
        return math.ceil(self.total_count / self.size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.page < self.pages_count
