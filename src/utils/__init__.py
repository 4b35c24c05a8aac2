"""Utilities module for the Pivot API."""

from .date_utils import utc_now_iso
from .hash_utils import rolling_hash, make_cache_key
from .json_utils import extract_json_object, extract_json_array
from .url_utils import URLUtils

__all__ = [
    "utc_now_iso",
    "rolling_hash",
    "make_cache_key",
    "extract_json_object",
    "extract_json_array",
    "URLUtils",
]
