from __future__ import annotations

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from dynmedia.api.dependencies import get_catalog, get_settings
from dynmedia.api.schemas import (
    AutoCropResponse,
    CropPayload,
    PathResponse,
    RenditionPayload,
    RenditionsResponse,
    ValidationInfo,
    ValidationResponse,
    parse_crop,
)
from dynmedia.config import Settings
from dynmedia.core import messages
from dynmedia.core.autocrop import auto_crops_by_format, centered_crop
from dynmedia.core.catalog import AssetCatalog
from dynmedia.core.dimensions import CropDimension
from dynmedia.core.errors import InvalidCropError, UnknownMediaFormatError
from dynmedia.core.models import Asset
from dynmedia.core.paths import build_content_path, build_image_path, build_smart_crop_path, smart_crop_preset
from dynmedia.core.renditions import classify, find_web_rendition
from dynmedia.core.validation import parse_media_format_options, validate_media

router = APIRouter(prefix="/api")

logger = structlog.get_logger(__name__)

AUTO_CROP = "auto"


@router.get("/dynamic-media/image")
async def image_path(
    asset: str,
    width: Optional[int] = Query(None, gt=0),
    height: Optional[int] = Query(None, gt=0),
    crop: Optional[str] = None,
    rotate: Optional[int] = None,
    catalog: AssetCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    resolved = _get_asset(catalog, asset)
    context = catalog.context_for(resolved, settings.size_limit)

    if (width is None) != (height is None):
        raise HTTPException(status_code=400, detail="width and height must be given together.")
    if width is None or height is None:
        if crop or rotate is not None:
            raise HTTPException(status_code=400, detail="crop and rotate require width and height.")
        return PathResponse(path=build_image_path(context)).model_dump()

    if crop == AUTO_CROP and rotate is None:
        preset = smart_crop_preset(context, width, height)
        if preset is not None:
            return PathResponse(path=build_smart_crop_path(context, preset)).model_dump()

    crop_dimension = _crop_dimension(resolved, crop, width, height)
    path = build_image_path(context, width, height, crop=crop_dimension, rotation=rotate)
    return PathResponse(path=path).model_dump()


@router.get("/dynamic-media/content")
async def content_path(
    asset: str,
    download: bool = False,
    catalog: AssetCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    resolved = _get_asset(catalog, asset)
    context = catalog.context_for(resolved, settings.size_limit)
    return PathResponse(path=build_content_path(context, download)).model_dump()


@router.get("/autocrop")
async def auto_crop(
    asset: str,
    media_formats: str = Query(..., alias="mediaFormats"),
    catalog: AssetCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    resolved = _get_asset(catalog, asset)
    names = [name.strip() for name in media_formats.split(",") if name.strip()]
    try:
        formats = catalog.get_media_formats(names)
    except UnknownMediaFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    crops = [
        CropPayload.from_crop(item.crop, item.media_format.name)
        for item in auto_crops_by_format(resolved, formats)
    ]
    return AutoCropResponse(crops=crops).model_dump(by_alias=True)


@router.get("/renditions")
async def renditions(
    asset: str,
    catalog: AssetCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    resolved = _get_asset(catalog, asset)
    items = []
    for rendition in resolved.renditions:
        kind = classify(rendition.name)
        items.append(
            RenditionPayload(
                name=rendition.name,
                width=rendition.width,
                height=rendition.height,
                kind=kind.value if kind else None,
            )
        )
    web = find_web_rendition(resolved.renditions)
    response = RenditionsResponse(renditions=items, web_rendition=web.name if web else None)
    return response.model_dump(by_alias=True)


@router.get("/mediaformat/validate")
async def validate(
    media_formats: Optional[str] = Query(None, alias="mediaFormats"),
    media_formats_mandatory: Optional[str] = Query(None, alias="mediaFormatsMandatory"),
    media_crop_auto: bool = Query(False, alias="mediaCropAuto"),
    media_ref: Optional[str] = Query(None, alias="mediaRef"),
    locale: Optional[str] = None,
    catalog: AssetCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    options = parse_media_format_options(media_formats, media_formats_mandatory)
    if not options or not media_ref:
        raise HTTPException(status_code=404, detail="Not found")

    try:
        result = validate_media(catalog, media_ref, options, media_crop_auto, settings.size_limit)
    except UnknownMediaFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    def text(key: str) -> str:
        return messages.get_text(key, locale, settings.DEFAULT_LOCALE)

    response = ValidationResponse(valid=result.valid)
    if result.reason is not None:
        response.reason = text(messages.INVALID_REASON_PREFIX + result.reason.value)
        response.reason_title = text(messages.ASSET_INVALID)
    if result.unresolved_optional:
        response.info = ValidationInfo(
            message=text(messages.UNRESOLVED_MEDIA_FORMATS),
            title=text(messages.ASSET_VALID),
            unresolved_media_formats=[str(media_format) for media_format in result.unresolved_optional],
        )
    return response.model_dump(by_alias=True, exclude_none=True)


def _get_asset(catalog: AssetCatalog, path: str) -> Asset:
    asset = catalog.get_asset(path)
    if asset is None:
        logger.warning("asset_not_found", asset=path)
        raise HTTPException(status_code=404, detail="Unknown asset")
    return asset


def _crop_dimension(asset: Asset, crop: Optional[str], width: int, height: int) -> Optional[CropDimension]:
    if not crop:
        return None
    if crop == AUTO_CROP:
        original = asset.original
        if original is None or original.width <= 0 or original.height <= 0:
            raise HTTPException(status_code=400, detail="Auto-crop requires an original rendition.")
        try:
            return centered_crop(original.width, original.height, width / height)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"No auto-crop possible for {width}x{height}: {exc}") from exc
    try:
        left, top, crop_width, crop_height = parse_crop(crop)
    except InvalidCropError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CropDimension(left=left, top=top, width=crop_width, height=crop_height)
