"""
Figma asset retrieval

- client.FigmaApi: authenticated GETs against the Figma REST API
- search: depth-first lookups in a file's document tree (by id, by frame name)
- assets: frame children -> asset list, asset list -> multi-scale image URLs
- retrieval.get_figmassets: the single entry point tying the above together

Usage:
    from figma_api import get_figmassets
    assets = get_figmassets("FILE_KEY", token="...", frame_names=["icons"], scales=[1, 2])
    # {"marker": {"id": "102:5", "@1x": "https://...", "@2x": "https://..."}, ...}
"""
from .errors import FigmaApiError, NoMatchingFramesError
from .client import FigmaApi
from .retrieval import get_figmassets, get_figma_icons_by_frames

__all__ = [
    "FigmaApi",
    "FigmaApiError",
    "NoMatchingFramesError",
    "get_figmassets",
    "get_figma_icons_by_frames",
]
