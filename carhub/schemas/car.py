"""Car listing schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CarUpdate(BaseModel):
    """Partial update of a car listing.

    Only fields present in the request body are applied; see
    ``model_fields_set``. An omitted field keeps its stored value.
    """

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    tags: list[str] | str | None = None


class CarResponse(BaseModel):
    """Car listing response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    description: str | None
    tags: list[str]
    images: list[str]
    created_at: datetime
    updated_at: datetime


class CarEnvelope(BaseModel):
    message: str
    car: CarResponse


class CarListEnvelope(BaseModel):
    message: str
    cars: list[CarResponse]


class CarDeleteResponse(BaseModel):
    message: str
