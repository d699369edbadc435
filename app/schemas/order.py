from pydantic import BaseModel, Field
from typing import Optional


class TrackingUpdate(BaseModel):
    tracking_number: str = Field(min_length=1, max_length=100)
    carrier: Optional[str] = None
    estimated_delivery: Optional[str] = None
