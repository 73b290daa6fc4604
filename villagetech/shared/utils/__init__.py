"""Shared utilities: datetime, generators."""

from villagetech.shared.utils.datetime import ensure_utc, utc_now
from villagetech.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
