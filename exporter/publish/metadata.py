"""
Publish Metadata - The metadata sent alongside an article.

Only explicitly set values are sent: boolean flags missing from the
content's meta (or set to an unrecognized value) are omitted rather
than sent as False.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional

from config.settings import Settings

from .models import ExportContent

logger = logging.getLogger(__name__)

# Publish metadata property → content meta key
BOOLEAN_METADATA_KEYS = {
    "isHidden": "is_hidden",
    "isPaid": "is_paid",
    "isPreview": "is_preview",
    "isSponsored": "is_sponsored",
}
MATURITY_RATING_KEY = "maturity_rating"

TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})

# (metadata data, content id) -> metadata data
MetadataFilter = Callable[[Dict[str, Any], str], Dict[str, Any]]


def parse_bool_setting(value: Any) -> Optional[bool]:
    """
    Normalize a boolean-like setting.

    Returns:
        True/False for recognized values, None when unset or unrecognized
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return None


def _custom_metadata(content: ExportContent) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for entry in content.custom_metadata or []:
        if not isinstance(entry, dict):
            continue
        key, kind = entry.get("key"), entry.get("type")
        if not key or not kind or "value" not in entry or entry["value"] is None:
            continue

        value = entry["value"]
        if kind == "array":
            try:
                value = json.loads(value) if isinstance(value, str) else value
            except ValueError:
                logger.debug(f"Skipping custom metadata '{key}': invalid JSON array")
                continue
            if not value or not isinstance(value, list):
                continue

        data[key] = value
    return data


def build_publish_metadata(
    content: ExportContent,
    settings: Settings,
    metadata_filter: Optional[MetadataFilter] = None,
) -> Dict[str, Any]:
    """
    Build the {'data': {...}} metadata object for a push.

    Args:
        content: Content being pushed
        settings: Export settings (section URL base)
        metadata_filter: Optional callback that may rewrite the data

    Returns:
        Metadata object with sorted section links, explicit flags,
        maturity rating and custom entries
    """
    data: Dict[str, Any] = {}

    if content.sections:
        data["links"] = {
            "sections": sorted(settings.section_url(section) for section in content.sections)
        }

    for prop, meta_key in BOOLEAN_METADATA_KEYS.items():
        flag = parse_bool_setting(content.meta.get(meta_key))
        if flag is not None:
            data[prop] = flag

    maturity_rating = content.meta.get(MATURITY_RATING_KEY)
    if maturity_rating:
        data["maturityRating"] = maturity_rating

    data.update(_custom_metadata(content))

    if metadata_filter is not None:
        data = metadata_filter(data, content.id)

    return {"data": data}
