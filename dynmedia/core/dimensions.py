from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

RATIO_TOLERANCE = 0.001


def round_half_away(value: float) -> int:
    # ROUND_HALF_UP in decimal rounds ties away from zero
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def ratio_of(width: float, height: float) -> float:
    if width <= 0 or height <= 0:
        return 0.0
    return width / height


def ratio_matches(first: float, second: float) -> bool:
    return abs(first - second) < RATIO_TOLERANCE


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Dimension must not be negative: {self.width}x{self.height}")

    @property
    def ratio(self) -> float:
        return ratio_of(self.width, self.height)


@dataclass(frozen=True)
class NamedDimension(Dimension):
    """Dimension registered under a smart-crop preset name."""

    name: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.name:
            raise ValueError("Smart-crop preset requires a name")


@dataclass(frozen=True)
class CropDimension:
    left: int
    top: int
    width: int
    height: int
    auto_crop: bool = False

    def __post_init__(self) -> None:
        if self.left < 0 or self.top < 0:
            raise ValueError(f"Crop offset must not be negative: {self.left},{self.top}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Crop size must be positive: {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def crop_string(self) -> str:
        return f"{self.left},{self.top},{self.right},{self.bottom}"

    @property
    def crop_string_width_height(self) -> str:
        return f"{self.left},{self.top},{self.width},{self.height}"

    def as_dimension(self) -> Dimension:
        return Dimension(width=self.width, height=self.height)

    def scale(self, factor: float) -> "CropDimension":
        return CropDimension(
            left=round_half_away(self.left * factor),
            top=round_half_away(self.top * factor),
            width=max(1, round_half_away(self.width * factor)),
            height=max(1, round_half_away(self.height * factor)),
            auto_crop=self.auto_crop,
        )


@dataclass(frozen=True)
class ImageProfile:
    name: str
    smart_crops: tuple[NamedDimension, ...] = field(default_factory=tuple)

    def smart_crop_for(self, width: int, height: int) -> Optional[NamedDimension]:
        for definition in self.smart_crops:
            if definition.width == width and definition.height == height:
                return definition
        return None
