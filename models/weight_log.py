from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WeightSample(BaseModel):
    """A single weight measurement, as stored in a user's 'weightLogs' collection."""

    id: Optional[str] = Field(
        default=None, description="The ID of the log document, if it has one."
    )
    timestamp: datetime = Field(
        alias="date", description="When the measurement was taken (UTC)."
    )
    weight_kg: float = Field(
        alias="weightKg", description="The measured weight in kilograms."
    )
    note: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are taken to be UTC so samples always compare."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
