"""
Static snapshots of a Figma asset set.

A snapshot is a directory (or URL prefix) holding every exported image plus
`assets.json`:

    [
      {"id": "marker", "fileName": "marker@2x.png", "scale": 2},
      ...
    ]

`export_snapshot` writes one from an image record; `load_stored_figmassets`
registers one into an image store without touching the Figma API.
"""

from __future__ import annotations

import json
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Set
from urllib.parse import urlparse

import requests

from common.logging_setup import get_logger
from common.types import AssetDescriptor, ImageRecord, ImageStoreLike, manifest_from_json, scale_key
from map_store.integration import best_entry, register_image


log = get_logger(__name__)

MANIFEST_NAME = "assets.json"


def normalize_base_path(path: Optional[str]) -> str:
    """"" stays "", anything else ends with exactly one "/"."""
    if not path:
        return ""
    return re.sub(r"/+$", "", path) + "/"


def _is_http(path: str) -> bool:
    return path.startswith("http://") or path.startswith("https://")


def read_manifest(path: str = "", session: Optional[requests.Session] = None, timeout: float = 30.0) -> List[AssetDescriptor]:
    base = normalize_base_path(path)
    url = f"{base}{MANIFEST_NAME}"
    if _is_http(url):
        r = (session or requests.Session()).get(url, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    else:
        data = json.loads(Path(url).read_text())
    return manifest_from_json(data)


def load_stored_figmassets(
    store: ImageStoreLike,
    path: str = "",
    session: Optional[requests.Session] = None,
    max_workers: Optional[int] = None,
) -> List[AssetDescriptor]:
    """
    Register every image listed in `{path}/assets.json` under its descriptor id,
    at the descriptor's scale. Each descriptor is one independent image.

    Loads run concurrently; once all settle the first failure (in manifest
    order) is raised. Images that loaded stay registered.
    """
    base = normalize_base_path(path)
    descriptors = read_manifest(base, session=session)
    if not descriptors:
        return descriptors

    # a store backed by one requests.Session shares it across these threads
    with ThreadPoolExecutor(max_workers=max_workers or min(8, len(descriptors))) as pool:
        futures = [
            pool.submit(register_image, store, d.id, f"{base}{d.file_name}", d.scale)
            for d in descriptors
        ]
    for f in futures:
        f.result()
    log.info("Loaded %d image(s) from snapshot %s", len(descriptors), base or ".")
    return descriptors


def _safe_name(name: str) -> str:
    # Figma names often contain "/" (e.g. "icons/marker")
    return re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("_") or "asset"


def _unique_file_name(stem: str, node_id: str, key: str, ext: str, used: Set[str]) -> str:
    candidates = [stem]
    if node_id:
        candidates.append(f"{stem}-{_safe_name(node_id)}")
    for base in candidates:
        file_name = f"{base}{key}.{ext}"
        if file_name not in used:
            used.add(file_name)
            return file_name
    n = 2
    while f"{candidates[-1]}-{n}{key}.{ext}" in used:
        n += 1
    file_name = f"{candidates[-1]}-{n}{key}.{ext}"
    used.add(file_name)
    return file_name


def _extension(url: str, fmt: str) -> str:
    suffix = Path(urlparse(url).path).suffix.lstrip(".")
    return suffix or fmt


def _scale_value(scale: float):
    # 2.0 -> 2
    return int(scale) if float(scale).is_integer() else scale


def export_snapshot(
    assets: ImageRecord,
    out_dir: str,
    session: Optional[requests.Session] = None,
    fmt: str = "png",
    timeout: float = 30.0,
) -> List[AssetDescriptor]:
    """
    Download each asset at its highest available scale into `out_dir` as
    `{name}@{n}x.{ext}` and write the matching `assets.json`, one descriptor per
    asset. Assets without any URL are skipped. When two names clean up to the
    same file name, the later one gets its node id (then a counter) appended.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    sess = session or requests.Session()

    descriptors: List[AssetDescriptor] = []
    used: Set[str] = set()
    for name, record in assets.items():
        entry = best_entry(record)
        if entry is None:
            log.warning("Asset %s has no image URL; not exported", name)
            continue
        scale, url = entry
        file_name = _unique_file_name(
            _safe_name(name), str(record.get("id") or ""), scale_key(scale), _extension(url, fmt), used
        )
        r = sess.get(url, timeout=timeout)
        r.raise_for_status()
        (out / file_name).write_bytes(r.content)
        descriptors.append(AssetDescriptor(id=name, file_name=file_name, scale=_scale_value(scale)))

    (out / MANIFEST_NAME).write_text(json.dumps([d.to_dict() for d in descriptors], indent=2))
    log.info("Exported %d image(s) to %s", len(descriptors), out)
    return descriptors
