from pydantic import BaseModel, Field
from typing import List, Optional


class BannerRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    image_url: str = Field(min_length=1, max_length=500)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    button_text: Optional[str] = None
    button_link: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class BannerPosition(BaseModel):
    id: int
    display_order: int


class BannerReorderRequest(BaseModel):
    banners: List[BannerPosition]
