"""Localized texts returned by the media format validation endpoint."""

from __future__ import annotations

from typing import Optional

INVALID_REASON_PREFIX = "io.wcm.handler.media.invalidReason."
ASSET_INVALID = "io.wcm.handler.media.assetInvalid"
ASSET_VALID = "io.wcm.handler.media.assetValid"
UNRESOLVED_MEDIA_FORMATS = "io.wcm.handler.media.assetInfounresolvedMediaFormats"

BUNDLES: dict[str, dict[str, str]] = {
    "en": {
        INVALID_REASON_PREFIX + "MEDIA_REFERENCE_INVALID": "The referenced asset does not exist.",
        INVALID_REASON_PREFIX + "NO_MATCHING_RENDITION": "The asset has no rendition matching the required media formats.",
        INVALID_REASON_PREFIX + "NOT_ENOUGH_MATCHING_RENDITIONS": "The asset does not match all mandatory media formats.",
        ASSET_INVALID: "Invalid asset",
        ASSET_VALID: "Valid asset",
        UNRESOLVED_MEDIA_FORMATS: "The asset does not match all optional media formats.",
    },
    "de": {
        INVALID_REASON_PREFIX + "MEDIA_REFERENCE_INVALID": "Das referenzierte Asset existiert nicht.",
        INVALID_REASON_PREFIX + "NO_MATCHING_RENDITION": "Das Asset hat keine Rendition passend zu den geforderten Medienformaten.",
        INVALID_REASON_PREFIX + "NOT_ENOUGH_MATCHING_RENDITIONS": "Das Asset passt nicht zu allen Pflicht-Medienformaten.",
        ASSET_INVALID: "Ungültiges Asset",
        ASSET_VALID: "Gültiges Asset",
        UNRESOLVED_MEDIA_FORMATS: "Das Asset passt nicht zu allen optionalen Medienformaten.",
    },
}


def _bundle_for(locale: Optional[str], default_locale: str) -> dict[str, str]:
    if locale:
        normalized = locale.replace("-", "_").lower()
        if normalized in BUNDLES:
            return BUNDLES[normalized]
        language = normalized.split("_", 1)[0]
        if language in BUNDLES:
            return BUNDLES[language]
    return BUNDLES.get(default_locale, {})


def get_text(key: str, locale: Optional[str] = None, default_locale: str = "en") -> str:
    """Message for key, or the key itself when no bundle defines it."""
    return _bundle_for(locale, default_locale).get(key, key)
