"""Word timing recovery from score records."""
from .resolver import resolve_timing, timing_from_item, timing_from_phone_extents

__all__ = ["resolve_timing", "timing_from_item", "timing_from_phone_extents"]
