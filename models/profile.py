from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserProfile(BaseModel):
    """The parts of a user's profile the weight prediction needs."""

    weight_kg: Optional[float] = Field(default=None, alias="weightKg", ge=10, le=500)
    goal_weight_kg: Optional[float] = Field(
        default=None, alias="goalWeightKg", ge=10, le=500
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
