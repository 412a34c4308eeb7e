from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

import structlog

from dynmedia.core.dimensions import Dimension, ImageProfile, NamedDimension
from dynmedia.core.errors import UnknownMediaFormatError
from dynmedia.core.models import Asset, AssetContext, MediaFormat
from dynmedia.core.renditions import Rendition

logger = structlog.get_logger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@dataclass(frozen=True)
class AssetCatalog:
    version: str
    media_formats: dict[str, MediaFormat]
    image_profiles: dict[str, ImageProfile]
    assets: dict[str, Asset]
    size_limit: Optional[Dimension] = field(default=None)

    def get_asset(self, path: str) -> Optional[Asset]:
        return self.assets.get(path)

    def get_media_format(self, name: str) -> MediaFormat:
        media_format = self.media_formats.get(name)
        if media_format is None:
            raise UnknownMediaFormatError(name)
        return media_format

    def get_media_formats(self, names: Iterable[str]) -> list[MediaFormat]:
        return [self.get_media_format(name) for name in names]

    def context_for(self, asset: Asset, default_size_limit: Dimension) -> AssetContext:
        return AssetContext.for_asset(asset, self.size_limit or default_size_limit)


def default_catalog_path(version: str = "v1") -> Path:
    return DATA_DIR / f"asset_catalog_{version}.json"


def load_catalog(path: Path) -> AssetCatalog:
    if not path.exists():
        raise FileNotFoundError(f"Missing asset catalog: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    catalog = parse_catalog(data)
    logger.info(
        "asset_catalog_loaded",
        path=str(path),
        version=catalog.version,
        assets=len(catalog.assets),
        media_formats=len(catalog.media_formats),
    )
    return catalog


def parse_catalog(data: dict[str, Any]) -> AssetCatalog:
    media_formats: dict[str, MediaFormat] = {}
    for item in data.get("media_formats", []):
        media_format = MediaFormat(
            name=item["name"],
            label=item.get("label", ""),
            width=int(item.get("width", 0)),
            height=int(item.get("height", 0)),
            fixed_ratio=float(item.get("ratio", 0.0)),
        )
        if media_format.name in media_formats:
            raise ValueError(f"Duplicate media format: {media_format.name}")
        media_formats[media_format.name] = media_format

    image_profiles: dict[str, ImageProfile] = {}
    for item in data.get("image_profiles", []):
        smart_crops = tuple(
            NamedDimension(name=crop["name"], width=int(crop["width"]), height=int(crop["height"]))
            for crop in item.get("smart_crops", [])
        )
        image_profiles[item["name"]] = ImageProfile(name=item["name"], smart_crops=smart_crops)

    assets: dict[str, Asset] = {}
    for item in data.get("assets", []):
        profile_name = item.get("image_profile")
        profile = None
        if profile_name:
            profile = image_profiles.get(profile_name)
            if profile is None:
                raise ValueError(f"Asset {item['path']} references unknown image profile {profile_name}")
        renditions = tuple(
            Rendition(name=rendition["name"], width=int(rendition.get("width", 0)), height=int(rendition.get("height", 0)))
            for rendition in item.get("renditions", [])
        )
        asset = Asset(
            path=item["path"],
            dynamic_media_object=item["dynamic_media_object"],
            renditions=renditions,
            image_profile=profile,
        )
        if asset.path in assets:
            raise ValueError(f"Duplicate asset path: {asset.path}")
        assets[asset.path] = asset

    size_limit = None
    if "size_limit" in data:
        size_limit = Dimension(width=int(data["size_limit"]["width"]), height=int(data["size_limit"]["height"]))

    return AssetCatalog(
        version=data["version"],
        media_formats=media_formats,
        image_profiles=image_profiles,
        assets=assets,
        size_limit=size_limit,
    )
