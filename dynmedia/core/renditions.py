"""Naming conventions of the renditions generated automatically by the DAM."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from dynmedia.core.dimensions import ratio_of

PREFIX_ASSET_THUMBNAIL = "cq5dam.thumbnail"
PREFIX_ASSET_WEB = "cq5dam.web"
ORIGINAL_RENDITION = "original"


@dataclass(frozen=True)
class Rendition:
    name: str
    width: int = 0
    height: int = 0

    @property
    def ratio(self) -> float:
        return ratio_of(self.width, self.height)


class RenditionKind(str, Enum):
    THUMBNAIL = "thumbnail"
    WEB = "web"
    VIDEO = "video"
    OTHER = "other"

    def matches(self, rendition_name: str) -> bool:
        return _PATTERNS[self].fullmatch(rendition_name) is not None


# Evaluated in order; OTHER also matches the names of the kinds before it.
_KIND_PATTERNS: tuple[tuple[RenditionKind, re.Pattern[str]], ...] = (
    (RenditionKind.THUMBNAIL, re.compile(re.escape(PREFIX_ASSET_THUMBNAIL) + r"\..*", re.DOTALL)),
    (RenditionKind.WEB, re.compile(re.escape(PREFIX_ASSET_WEB) + r"\..*", re.DOTALL)),
    (RenditionKind.VIDEO, re.compile(r"cq5dam\.video\..*", re.DOTALL)),
    (RenditionKind.OTHER, re.compile(r"(cq5dam|cqdam)\..*", re.DOTALL)),
)
_PATTERNS = dict(_KIND_PATTERNS)


def classify(rendition_name: str) -> Optional[RenditionKind]:
    for kind, pattern in _KIND_PATTERNS:
        if pattern.fullmatch(rendition_name) is not None:
            return kind
    return None


def is_generated(rendition_name: str) -> bool:
    return classify(rendition_name) is not None


def find_web_rendition(renditions: Iterable[Rendition]) -> Optional[Rendition]:
    """First web rendition, the one the image editor uses for cropping."""
    for rendition in renditions:
        if RenditionKind.WEB.matches(rendition.name):
            return rendition
    return None
