"""Diamond listing Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class DiamondSummary(BaseModel):
    """Listing fields shown in inbox and sent lists."""

    id: int
    name: str
    price: float
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class DiamondDetail(DiamondSummary):
    """Listing fields shown when a single thread is opened."""

    carat: float | None = None
    cut: str | None = None
    color: str | None = None
    clarity: str | None = None
