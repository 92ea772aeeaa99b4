from __future__ import annotations

import io
import threading
from pathlib import Path
from typing import Dict, List, Optional

import requests
from PIL import Image

from common.logging_setup import get_logger
from common.types import StoredImage


log = get_logger(__name__)


def _is_http(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


class ImageStore:
    """
    In-process image registry with the map-style `load_image`/`add_image` pair.

    Images are keyed by name and carry the pixel ratio they were rendered at,
    so a 2x rasterisation displays at the same logical size as a 1x one.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30.0):
        self.session = session or requests.Session()
        self.timeout = timeout
        self._images: Dict[str, StoredImage] = {}
        self._lock = threading.Lock()

    # -------- public API --------

    def load_image(self, url: str) -> Image.Image:
        """
        Fetch and decode an image. http(s) URLs go through the session,
        anything else is treated as a local path.
        """
        if _is_http(url):
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
            img = Image.open(io.BytesIO(r.content))
        else:
            img = Image.open(Path(url))
        # decode now; the file/buffer is not kept around
        img.load()
        return img

    def add_image(self, key: str, image: Image.Image, pixel_ratio: float = 1) -> StoredImage:
        if pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio must be positive, got {pixel_ratio!r}")
        entry = StoredImage(image=image, pixel_ratio=pixel_ratio)
        with self._lock:
            if key in self._images:
                raise ValueError(f"An image named {key!r} already exists")
            self._images[key] = entry
        log.debug("Registered image %s", key, extra={"extra": entry.to_meta()})
        return entry

    def get_image(self, key: str) -> Optional[StoredImage]:
        with self._lock:
            return self._images.get(key)

    def has_image(self, key: str) -> bool:
        with self._lock:
            return key in self._images

    def remove_image(self, key: str) -> None:
        with self._lock:
            self._images.pop(key, None)

    def list_images(self) -> List[str]:
        with self._lock:
            return sorted(self._images)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "images": len(self._images),
                "pixels": sum(e.size[0] * e.size[1] for e in self._images.values()),
            }
