from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from dynmedia.core.dimensions import Dimension, ImageProfile, ratio_of
from dynmedia.core.renditions import ORIGINAL_RENDITION, Rendition


@dataclass(frozen=True)
class MediaFormat:
    name: str
    label: str = ""
    width: int = 0
    height: int = 0
    fixed_ratio: float = 0.0

    @property
    def ratio(self) -> float:
        if self.fixed_ratio > 0:
            return self.fixed_ratio
        return ratio_of(self.width, self.height)

    def __str__(self) -> str:
        return self.label or self.name


@dataclass(frozen=True)
class Asset:
    path: str
    dynamic_media_object: str
    renditions: tuple[Rendition, ...] = field(default_factory=tuple)
    image_profile: Optional[ImageProfile] = None

    @property
    def original(self) -> Optional[Rendition]:
        for rendition in self.renditions:
            if rendition.name == ORIGINAL_RENDITION:
                return rendition
        return None


@dataclass(frozen=True)
class AssetContext:
    """What the path builder needs to know about an asset."""

    dynamic_media_object: str
    size_limit: Dimension
    image_profile: Optional[ImageProfile] = None

    @classmethod
    def for_asset(cls, asset: Asset, size_limit: Dimension) -> "AssetContext":
        return cls(
            dynamic_media_object=asset.dynamic_media_object,
            size_limit=size_limit,
            image_profile=asset.image_profile,
        )
