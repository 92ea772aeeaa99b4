from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Optional, Sequence

from common.logging_setup import get_logger
from common.types import AssetList, DocumentNode, ImageRecord, scale_key, validate_scales
from figma_api.client import FigmaApi


log = get_logger(__name__)


def make_asset_list(frames: Iterable[Optional[DocumentNode]]) -> AssetList:
    """
    Named top-level children of the given frames, name -> node id.
    Later frames (and later children) replace earlier entries of the same name.
    """
    assets: AssetList = {}
    for frame in frames:
        if frame is None or not frame.children:
            continue
        for node in frame.children:
            assets[node.name] = node.id
    return assets


def _image_list(api: FigmaApi, file_key: str, node_ids: Sequence[str], scale: float, fmt: str) -> Dict[str, Any]:
    body = api.get(f"images/{file_key}", {"ids": list(node_ids), "format": fmt, "scale": scale})
    return (body or {}).get("images") or {}


def get_asset_images(
    api: FigmaApi,
    file_key: str,
    asset_list: AssetList,
    scales: Sequence[float] = (1,),
    fmt: str = "png",
    max_workers: Optional[int] = None,
) -> ImageRecord:
    """
    Request rasterisations of every asset at each scale (one request per
    scale, issued concurrently) and fold them into one record per asset:

        {"marker": {"id": "102:5", "@1x": "https://...", "@2x": None}, ...}

    A node missing from a scale's response yields None for that scale.
    Any failed request fails the whole call.
    """
    scales = validate_scales(scales)
    if not asset_list:
        return {}
    node_ids = list(asset_list.values())

    # api.session is shared by the worker threads; only plain GETs go through it
    with ThreadPoolExecutor(max_workers=max_workers or len(scales)) as pool:
        futures = [pool.submit(_image_list, api, file_key, node_ids, s, fmt) for s in scales]
        # consumed in scale order; the first failure in that order is raised
        image_lists = [f.result() for f in futures]

    out: ImageRecord = {}
    for scale, images in zip(scales, image_lists):
        key = scale_key(scale)
        for name, node_id in asset_list.items():
            rec = out.setdefault(name, {"id": node_id})
            rec[key] = images.get(node_id)

    missing = sum(1 for rec in out.values() for k, v in rec.items() if k != "id" and v is None)
    if missing:
        log.warning("Figma returned no URL for %d asset/scale pairs", missing, extra={"extra": {"file_key": file_key}})
    return out
