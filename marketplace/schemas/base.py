"""
Shared schema configuration - the HTTP API speaks camelCase
"""
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; attach the zone so JSON carries an offset"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
