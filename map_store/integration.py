from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from common.logging_setup import get_logger
from common.types import ImageRecord, ImageStoreLike, parse_scale_key
from figma_api.retrieval import get_figmassets


log = get_logger(__name__)

# map rendering looks best with 2x rasterisations
MAP_DEFAULT_SCALES = (2,)


def best_entry(record: Mapping[str, Optional[str]]) -> Optional[Tuple[float, str]]:
    """(scale, url) for the highest "@Nx" entry of `record` that carries a URL."""
    found = [(parse_scale_key(k), v) for k, v in record.items() if v]
    found = [(s, v) for s, v in found if s is not None]
    return max(found, key=lambda e: e[0]) if found else None


def best_scale(record: Mapping[str, Optional[str]]) -> Optional[float]:
    entry = best_entry(record)
    return entry[0] if entry else None


def register_image(store: ImageStoreLike, name: str, url: str, scale: float) -> None:
    image = store.load_image(url)
    store.add_image(name, image, pixel_ratio=scale)


def add_assets_to_map(
    store: ImageStoreLike, assets: ImageRecord, max_workers: Optional[int] = None
) -> Dict[str, float]:
    """
    Register every asset under its own name at its highest available scale.

    Loads run concurrently. Nothing is retried and no lower scale is tried on
    failure; once all loads settle the first failure (in asset order) is raised.

    Returns:
        {asset name: pixel ratio} for the assets that were scheduled.
    """
    plan: Dict[str, Tuple[float, str]] = {}
    for name, record in assets.items():
        entry = best_entry(record)
        if entry is None:
            log.warning("Asset %s has no image URL; skipped", name)
            continue
        plan[name] = entry
    if not plan:
        return {}

    # a store backed by one requests.Session shares it across these threads
    with ThreadPoolExecutor(max_workers=max_workers or min(8, len(plan))) as pool:
        futures = [
            pool.submit(register_image, store, name, url, scale)
            for name, (scale, url) in plan.items()
        ]
    # pool exit waits for every load
    for f in futures:
        f.result()
    return {name: scale for name, (scale, _) in plan.items()}


def load_figmassets(
    store: Optional[ImageStoreLike] = None, scales: Optional[Sequence[float]] = None, **kwargs: Any
) -> ImageRecord:
    """
    get_figmassets(), then register the results into `store` when one is given.
    With a store and no explicit scales, assets are requested at 2x.
    """
    if scales is None:
        scales = MAP_DEFAULT_SCALES if store is not None else (1,)
    assets = get_figmassets(scales=scales, **kwargs)
    if store is not None:
        registered = add_assets_to_map(store, assets)
        log.info("Registered %d of %d asset(s) into image store", len(registered), len(assets))
    return assets
