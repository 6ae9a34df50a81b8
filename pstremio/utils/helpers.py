"""
Helper Utilities
General purpose utility functions
"""
from typing import Dict, Mapping, Optional


def merge_headers(*layers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Merge header mappings in precedence order
    
    Args:
        layers: Header mappings, lowest precedence first. None is skipped.
        
    Returns:
        New dict where later layers win on key conflicts
    """
    merged: Dict[str, str] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def stremio_type(media_type: str) -> str:
    """Map a provider media type ("movie"/"show") to a Stremio type"""
    return "series" if media_type == "show" else "movie"
