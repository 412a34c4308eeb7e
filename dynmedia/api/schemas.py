from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from dynmedia.core.dimensions import CropDimension
from dynmedia.core.errors import InvalidCropError


class PathResponse(BaseModel):
    path: str


class CropPayload(BaseModel):
    media_format: Optional[str] = Field(default=None, serialization_alias="mediaFormat")
    left: int
    top: int
    width: int
    height: int

    @classmethod
    def from_crop(cls, crop: CropDimension, media_format: Optional[str] = None) -> "CropPayload":
        return cls(media_format=media_format, left=crop.left, top=crop.top, width=crop.width, height=crop.height)


class AutoCropResponse(BaseModel):
    crops: list[CropPayload]


class RenditionPayload(BaseModel):
    name: str
    width: int
    height: int
    kind: Optional[str] = None


class RenditionsResponse(BaseModel):
    renditions: list[RenditionPayload]
    web_rendition: Optional[str] = Field(default=None, serialization_alias="webRendition")


class ValidationInfo(BaseModel):
    message: str
    title: str
    unresolved_media_formats: list[str] = Field(serialization_alias="unresolvedMediaFormats")


class ValidationResponse(BaseModel):
    valid: bool
    reason: Optional[str] = None
    reason_title: Optional[str] = Field(default=None, serialization_alias="reasonTitle")
    info: Optional[ValidationInfo] = None


def parse_crop(value: str) -> tuple[int, int, int, int]:
    """Parse "left,top,width,height"."""
    parts = value.split(",")
    if len(parts) != 4:
        raise InvalidCropError(f"Crop must be left,top,width,height: {value}")
    try:
        left, top, width, height = (int(part.strip()) for part in parts)
    except ValueError as exc:
        raise InvalidCropError(f"Crop values must be integers: {value}") from exc
    if left < 0 or top < 0 or width <= 0 or height <= 0:
        raise InvalidCropError(f"Crop out of range: {value}")
    return left, top, width, height
