from __future__ import annotations

from typing import Optional, Sequence

import requests

from common.logging_setup import get_logger
from common.types import DocumentNode, ImageRecord, validate_scales
from figma_api.assets import get_asset_images, make_asset_list
from figma_api.client import DEFAULT_BASE_URL, FigmaApi
from figma_api.errors import NoMatchingFramesError
from figma_api.search import find_frame_ids_for_names, find_nodes_by_id


log = get_logger(__name__)


def get_figmassets(
    file_key: str,
    token: Optional[str] = None,
    *,
    frame_ids: Sequence[str] = (),
    frame_names: Sequence[str] = (),
    scales: Sequence[float] = (1,),
    fmt: str = "png",
    session: Optional[requests.Session] = None,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 30.0,
) -> ImageRecord:
    """
    URLs of rasterisations of every object inside one or more frames,
    selected by id and/or name, at one or more scales.

    Returns:
        {
          "asset-name": {"id": "102:5", "@1x": "https://...", "@2x": "https://..."},
          ...
        }

    Raises:
        ValueError: no file key / token, or invalid scales.
        FigmaApiError: any Figma request returned status >= 400.
        NoMatchingFramesError: none of the ids/names resolved to a frame.
    """
    if not file_key:
        raise ValueError("Figma file key is required")
    scales = validate_scales(scales)
    api = FigmaApi(token=token, session=session, base_url=base_url, timeout=timeout)

    file = api.get(f"files/{file_key}")
    document = DocumentNode.from_dict(file["document"])

    ids = list(frame_ids)
    if frame_names:
        ids.extend(i for i in find_frame_ids_for_names(document, frame_names) if i)

    frames = [f for f in find_nodes_by_id(document, ids) if f is not None]
    if not frames:
        raise NoMatchingFramesError(frame_ids, frame_names)

    asset_list = make_asset_list(frames)
    log.info(
        "Resolved %d frame(s), %d asset(s)",
        len(frames),
        len(asset_list),
        extra={"extra": {"file_key": file_key, "frames": [f.id for f in frames]}},
    )
    return get_asset_images(api, file_key, asset_list, scales=scales, fmt=fmt)


get_figma_icons_by_frames = get_figmassets
