"""Paths for the dynamic media image serving API.

Only the server-relative part is built here; scheme and host belong to the
caller. The literals below are the contract with the image server.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from dynmedia.core.clamp import clamp_dimension
from dynmedia.core.dimensions import CropDimension, NamedDimension
from dynmedia.core.errors import PathEncodingError
from dynmedia.core.models import AssetContext

IMAGE_SERVER_PATH = "/is/image/"
CONTENT_SERVER_PATH = "/is/content/"

# Served with "Content-Disposition: attachment" by a custom ruleset on the image server.
DOWNLOAD_SUFFIX = "?cdh=attachment"

# Colon between object and preset name, encoded since it sits inside the object segment.
PRESET_SEPARATOR = "%3A"


def encode_object(dynamic_media_object: str) -> str:
    """Percent-encode folder and file name parts separately.

    Slashes are the only separators kept; empty parts are dropped.
    """
    segments = [segment for segment in dynamic_media_object.split("/") if segment]
    encoded: list[str] = []
    for segment in segments:
        try:
            encoded.append(quote(segment, safe="", encoding="utf-8", errors="strict"))
        except UnicodeEncodeError as exc:
            raise PathEncodingError(segment, exc) from exc
    return "/".join(encoded)


def build_content_path(context: AssetContext, download_attachment: bool = False) -> str:
    path = CONTENT_SERVER_PATH + encode_object(context.dynamic_media_object)
    if download_attachment:
        path += DOWNLOAD_SUFFIX
    return path


def build_image_path(
    context: AssetContext,
    width: Optional[int] = None,
    height: Optional[int] = None,
    crop: Optional[CropDimension] = None,
    rotation: Optional[int] = None,
) -> str:
    object_path = IMAGE_SERVER_PATH + encode_object(context.dynamic_media_object)
    if width is None or height is None:
        return object_path

    if crop is not None and crop.auto_crop and rotation is None:
        preset = smart_crop_preset(context, width, height)
        if preset is not None:
            return build_smart_crop_path(context, preset)

    size = clamp_dimension(width, height, context.size_limit.width, context.size_limit.height)

    params: list[str] = []
    if crop is not None:
        params.append(f"crop={crop.crop_string_width_height}")
    if rotation is not None:
        params.append(f"rotate={rotation}")
    params.append(f"wid={size.width}")
    params.append(f"hei={size.height}")
    # size is already fitted to the crop ratio; stretch avoids 1px background lines
    params.append("fit=stretch")
    return object_path + "?" + "&".join(params)


def smart_crop_preset(context: AssetContext, width: int, height: int) -> Optional[NamedDimension]:
    if context.image_profile is None:
        return None
    return context.image_profile.smart_crop_for(width, height)


def build_smart_crop_path(context: AssetContext, preset: NamedDimension) -> str:
    """Path to a smart-crop preset, resolved by the image server by name."""
    return IMAGE_SERVER_PATH + encode_object(context.dynamic_media_object) + PRESET_SEPARATOR + preset.name
