"""Checks whether an asset reference satisfies a set of media formats.

Used by the file upload component: the editor picks an asset and the
endpoint reports whether it can be rendered in the required formats.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

import structlog

from dynmedia.core.autocrop import auto_crop_for_format
from dynmedia.core.catalog import AssetCatalog
from dynmedia.core.dimensions import CropDimension, Dimension, ratio_matches, round_half_away
from dynmedia.core.models import Asset, AssetContext, MediaFormat
from dynmedia.core.paths import build_image_path
from dynmedia.core.renditions import Rendition, find_web_rendition, is_generated

logger = structlog.get_logger(__name__)


class MediaInvalidReason(str, Enum):
    MEDIA_REFERENCE_INVALID = "MEDIA_REFERENCE_INVALID"
    NO_MATCHING_RENDITION = "NO_MATCHING_RENDITION"
    NOT_ENOUGH_MATCHING_RENDITIONS = "NOT_ENOUGH_MATCHING_RENDITIONS"


@dataclass(frozen=True)
class MediaFormatOption:
    name: str
    mandatory: bool = False


@dataclass(frozen=True)
class ResolvedFormat:
    media_format: MediaFormat
    rendition: Rendition
    crop: Optional[CropDimension]
    path: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[MediaInvalidReason] = None
    resolved: list[ResolvedFormat] = field(default_factory=list)
    unresolved_optional: list[MediaFormat] = field(default_factory=list)


TRUE_VALUES = frozenset({"true", "on", "yes", "y", "t"})


def _to_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def _split(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_media_format_options(media_formats: Optional[str], mandatory_flags: Optional[str]) -> list[MediaFormatOption]:
    names = _split(media_formats)
    flags = [_to_bool(flag) for flag in _split(mandatory_flags)]

    options: list[MediaFormatOption] = []
    for i, name in enumerate(names):
        mandatory = False
        if len(flags) == 1:
            # a single flag applies to all media formats
            mandatory = flags[0]
        elif len(flags) > i:
            mandatory = flags[i]
        options.append(MediaFormatOption(name=name, mandatory=mandatory))
    return options


def _target_size(media_format: MediaFormat, width: int, height: int) -> Dimension:
    ratio = media_format.ratio or width / height
    if media_format.width > 0 and media_format.height > 0:
        return Dimension(width=media_format.width, height=media_format.height)
    if media_format.width > 0:
        return Dimension(width=media_format.width, height=round_half_away(media_format.width / ratio))
    if media_format.height > 0:
        return Dimension(width=round_half_away(media_format.height * ratio), height=media_format.height)
    return Dimension(width=width, height=height)


def _covers(media_format: MediaFormat, width: int, height: int) -> bool:
    return width >= media_format.width and height >= media_format.height


def _fit_within(crop: CropDimension, rendition: Rendition) -> CropDimension:
    width = min(crop.width, rendition.width - crop.left)
    height = min(crop.height, rendition.height - crop.top)
    if (width, height) == (crop.width, crop.height):
        return crop
    return CropDimension(left=crop.left, top=crop.top, width=width, height=height, auto_crop=crop.auto_crop)


def _resolve_by_rendition(asset: Asset, media_format: MediaFormat, context: AssetContext) -> Optional[ResolvedFormat]:
    ratio = media_format.ratio
    for rendition in asset.renditions:
        if is_generated(rendition.name) or rendition.width <= 0 or rendition.height <= 0:
            continue
        if not _covers(media_format, rendition.width, rendition.height):
            continue
        if ratio > 0 and not ratio_matches(rendition.ratio, ratio):
            continue
        size = _target_size(media_format, rendition.width, rendition.height)
        path = build_image_path(context, size.width, size.height)
        return ResolvedFormat(media_format=media_format, rendition=rendition, crop=None, path=path)
    return None


def _resolve_by_auto_crop(asset: Asset, media_format: MediaFormat, context: AssetContext) -> Optional[ResolvedFormat]:
    original = asset.original
    web = find_web_rendition(asset.renditions)
    crop = auto_crop_for_format(asset, media_format)
    if crop is None or web is None or original is None or original.width <= 0:
        return None

    # crop is computed on the web rendition, map it onto the original
    crop = _fit_within(crop.scale(original.width / web.width), original)
    if not _covers(media_format, crop.width, crop.height):
        return None
    size = _target_size(media_format, crop.width, crop.height)
    path = build_image_path(context, size.width, size.height, crop=crop)
    return ResolvedFormat(media_format=media_format, rendition=original, crop=crop, path=path)


def resolve_format(asset: Asset, media_format: MediaFormat, auto_crop: bool, context: AssetContext) -> Optional[ResolvedFormat]:
    resolved = _resolve_by_rendition(asset, media_format, context)
    if resolved is None and auto_crop and media_format.ratio > 0:
        resolved = _resolve_by_auto_crop(asset, media_format, context)
    return resolved


def validate_media(
    catalog: AssetCatalog,
    media_ref: str,
    options: Sequence[MediaFormatOption],
    auto_crop: bool,
    size_limit: Dimension,
) -> ValidationResult:
    asset = catalog.get_asset(media_ref)
    if asset is None:
        logger.info("media_reference_invalid", media_ref=media_ref)
        return ValidationResult(valid=False, reason=MediaInvalidReason.MEDIA_REFERENCE_INVALID)

    context = catalog.context_for(asset, size_limit)
    resolved: list[ResolvedFormat] = []
    missing_mandatory: list[MediaFormat] = []
    unresolved_optional: list[MediaFormat] = []
    for option in options:
        media_format = catalog.get_media_format(option.name)
        result = resolve_format(asset, media_format, auto_crop, context)
        if result is not None:
            resolved.append(result)
        elif option.mandatory:
            missing_mandatory.append(media_format)
        else:
            unresolved_optional.append(media_format)

    reason = None
    if not resolved:
        reason = MediaInvalidReason.NO_MATCHING_RENDITION
    elif missing_mandatory:
        reason = MediaInvalidReason.NOT_ENOUGH_MATCHING_RENDITIONS

    if len(options) <= 1:
        unresolved_optional = []

    logger.debug(
        "media_validated",
        media_ref=media_ref,
        resolved=[item.media_format.name for item in resolved],
        missing_mandatory=[item.name for item in missing_mandatory],
        reason=reason.value if reason else None,
    )
    return ValidationResult(
        valid=reason is None,
        reason=reason,
        resolved=resolved,
        unresolved_optional=unresolved_optional,
    )
