"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Public participant fields shown alongside a thread."""

    id: int
    name: str = Field(..., description="Display name of the account")
    email: str = Field(..., description="Contact address of the account")

    model_config = ConfigDict(from_attributes=True)
