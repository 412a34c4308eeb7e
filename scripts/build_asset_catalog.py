"""Build an asset catalog from a directory of rendition files.

Expected layout: <root>/<asset path>/<rendition name>, where each asset is a
directory holding its renditions (one of them named "original.<ext>").
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError

from dynmedia.core.renditions import ORIGINAL_RENDITION


def rendition_size(path: Path) -> tuple[int, int]:
    try:
        with Image.open(path) as image:
            return image.size
    except UnidentifiedImageError:
        # not an image (pdf, video, text); served as static content
        return 0, 0


def rendition_name(path: Path) -> str:
    if path.stem == ORIGINAL_RENDITION:
        return ORIGINAL_RENDITION
    return path.name


def build_asset(asset_dir: Path, root: Path, dam_root: str, image_profile: Optional[str]) -> dict[str, Any]:
    relative = asset_dir.relative_to(root).as_posix()
    renditions = []
    for path in sorted(asset_dir.iterdir()):
        if not path.is_file():
            continue
        width, height = rendition_size(path)
        renditions.append({"name": rendition_name(path), "width": width, "height": height})
    # original first, the order the DAM lists renditions in
    renditions.sort(key=lambda item: item["name"] != ORIGINAL_RENDITION)

    asset: dict[str, Any] = {
        "path": f"{dam_root.rstrip('/')}/{relative}",
        "dynamic_media_object": relative.rsplit(".", 1)[0],
        "renditions": renditions,
    }
    if image_profile:
        asset["image_profile"] = image_profile
    return asset


def build_catalog(root: Path, output: Path, version: str, dam_root: str, image_profile: Optional[str]) -> None:
    asset_dirs = sorted({path.parent for path in root.rglob(f"{ORIGINAL_RENDITION}.*") if path.is_file()})
    if not asset_dirs:
        raise RuntimeError(f"No assets with an original rendition found in {root}")

    catalog: dict[str, Any] = {
        "version": version,
        "media_formats": [],
        "image_profiles": [],
        "assets": [build_asset(asset_dir, root, dam_root, image_profile) for asset_dir in asset_dirs],
    }
    if image_profile:
        catalog["image_profiles"].append({"name": image_profile, "smart_crops": []})

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(catalog, ensure_ascii=False, indent=2), encoding="utf-8")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--renditions", type=Path, required=True)
    parser.add_argument("--output", type=Path, default=Path("dynmedia/data/asset_catalog_v1.json"))
    parser.add_argument("--version", type=str, default="v1")
    parser.add_argument("--dam-root", type=str, default="/content/dam")
    parser.add_argument("--image-profile", type=str, default=None)
    args = parser.parse_args()

    build_catalog(args.renditions, args.output, args.version, args.dam_root, args.image_profile)


if __name__ == "__main__":
    main()
