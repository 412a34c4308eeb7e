from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from dynmedia.core.dimensions import CropDimension, round_half_away
from dynmedia.core.models import Asset, MediaFormat
from dynmedia.core.renditions import find_web_rendition


@dataclass(frozen=True)
class FormatCrop:
    media_format: MediaFormat
    crop: CropDimension


def centered_crop(source_width: int, source_height: int, target_ratio: float, auto_crop: bool = True) -> CropDimension:
    """Largest rectangle with the target ratio, centered inside the source."""
    source_ratio = source_width / source_height
    if source_ratio > target_ratio:
        width = round_half_away(source_height * target_ratio)
        height = source_height
        top = 0
        left = round_half_away((source_width - width) / 2)
    else:
        width = source_width
        height = round_half_away(source_width / target_ratio)
        top = round_half_away((source_height - height) / 2)
        left = 0
    return CropDimension(left=left, top=top, width=width, height=height, auto_crop=auto_crop)


def auto_crop_for_format(asset: Asset, media_format: MediaFormat) -> Optional[CropDimension]:
    """Auto-crop rectangle on the asset's web rendition, if the format has a ratio."""
    ratio = media_format.ratio
    if ratio <= 0:
        return None
    rendition = find_web_rendition(asset.renditions)
    if rendition is None or rendition.width <= 0 or rendition.height <= 0:
        return None
    try:
        return centered_crop(rendition.width, rendition.height, ratio)
    except ValueError:
        # ratio too extreme for the rendition, the crop rounds to an empty rectangle
        return None


def auto_crops_by_format(asset: Asset, media_formats: Optional[Iterable[MediaFormat]]) -> list[FormatCrop]:
    crops: list[FormatCrop] = []
    for media_format in media_formats or ():
        crop = auto_crop_for_format(asset, media_format)
        if crop is not None:
            crops.append(FormatCrop(media_format=media_format, crop=crop))
    return crops


def auto_crop_dimensions_for_formats(asset: Asset, media_formats: Optional[Iterable[MediaFormat]]) -> list[CropDimension]:
    return [item.crop for item in auto_crops_by_format(asset, media_formats)]
