"""Shared model configuration."""
from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel

# Required text fields are trimmed before the non-empty check
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def to_utc_iso(value: datetime) -> str:
    """
    Render a timestamp as ISO 8601 UTC with a ``Z`` suffix.

    Naive values are taken to be UTC, which is how they are stored.

    Examples:
        >>> to_utc_iso(datetime(2024, 1, 1, 8, 30))
        '2024-01-01T08:30:00Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


UtcDatetime = Annotated[datetime, PlainSerializer(to_utc_iso, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire.

    Snake_case field names are accepted on input as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
