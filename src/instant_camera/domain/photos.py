"""Domain models for captured photos."""

from pydantic import BaseModel, ConfigDict, Field

# 9999-12-31T23:59:59.999Z in epoch milliseconds.
MAX_CAPTURED_AT = 253402300799999


class Photo(BaseModel):
    """A captured photo; immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    image_data: str = Field(alias="imageData", min_length=1)
    captured_at: int = Field(alias="capturedAt", ge=0, le=MAX_CAPTURED_AT)
