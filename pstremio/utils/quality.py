"""
Quality Classification
Maps a vertical resolution to a canonical quality label
"""
from typing import Literal, Optional, Tuple

Quality = Literal["360", "480", "720", "1080", "4k", "unknown"]

UNKNOWN_QUALITY: Quality = "unknown"

CANONICAL_HEIGHTS: Tuple[Tuple[int, Quality], ...] = (
    (360, "360"),
    (480, "480"),
    (720, "720"),
    (1080, "1080"),
    (2160, "4k"),
)

# Heights this far (or further) from every canonical height are unknown
MAX_HEIGHT_DISTANCE = 100


def classify_height(height: Optional[int]) -> Optional[Quality]:
    """
    Classify a pixel height as a canonical quality
    
    Args:
        height: Vertical resolution in pixels, or None when undeclared
        
    Returns:
        Nearest canonical label, "unknown" if nothing is close enough,
        or None when no height was given
    """
    if not height or height <= 0:
        return None

    canonical, label = min(CANONICAL_HEIGHTS, key=lambda item: abs(item[0] - height))
    if abs(canonical - height) >= MAX_HEIGHT_DISTANCE:
        return UNKNOWN_QUALITY
    return label

