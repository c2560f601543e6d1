"""Base class for read-only descriptors decoded from daemon responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Descriptor(BaseModel):
    """Immutable value mirroring daemon-reported fields.

    Unknown fields are ignored so that newer daemons remain readable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def none_as_empty(value: Any, empty: Any) -> Any:
    """The daemon reports empty collections as ``null``; normalize them."""
    return empty if value is None else value
