from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple


# name -> node id
AssetList = Dict[str, str]
# name -> {"id": node id, "@1x": url | None, "@2x": ...}
ImageRecord = Dict[str, Dict[str, Optional[str]]]

FRAME_TYPE = "FRAME"

_SCALE_KEY_RE = re.compile(r"^@([0-9]*\.?[0-9]+)x$")


def scale_key(scale: float) -> str:
    """`2` -> "@2x", `1.5` -> "@1.5x"."""
    return f"@{float(scale):g}x"


def parse_scale_key(key: str) -> Optional[float]:
    """Inverse of scale_key; None for keys that are not scale-tagged (e.g. "id")."""
    m = _SCALE_KEY_RE.match(key)
    return float(m.group(1)) if m else None


def validate_scales(scales) -> Tuple[float, ...]:
    out = tuple(scales)
    if not out:
        raise ValueError("At least one scale is required")
    for s in out:
        if isinstance(s, bool) or not isinstance(s, (int, float)) or s <= 0:
            raise ValueError(f"Scale must be a positive number, got {s!r}")
    return out


@dataclass(frozen=True, slots=True)
class DocumentNode:
    """
    One node of a Figma document tree.

    Attributes:
        id: node identifier, unique within a file (e.g. "102:5").
        name: display name; not unique.
        type: Figma node type tag ("DOCUMENT", "CANVAS", "FRAME", ...).
        children: ordered child nodes, or None for leaves.
    """
    id: str
    name: str = ""
    type: str = ""
    children: Optional[Tuple["DocumentNode", ...]] = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentNode":
        kids = data.get("children")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            children=None if kids is None else tuple(cls.from_dict(k) for k in kids),
        )


@dataclass(frozen=True, slots=True)
class AssetDescriptor:
    """One image/scale pair of an exported snapshot (`assets.json` entry)."""
    id: str
    file_name: str
    scale: float = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetDescriptor":
        try:
            return cls(id=str(data["id"]), file_name=str(data["fileName"]), scale=data.get("scale", 1))
        except KeyError as e:
            raise ValueError(f"Asset descriptor is missing {e.args[0]!r}: {dict(data)}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "fileName": self.file_name, "scale": self.scale}


@dataclass(slots=True)
class StoredImage:
    image: Any  # PIL.Image.Image
    pixel_ratio: float = 1

    @property
    def size(self) -> Tuple[int, int]:
        return tuple(self.image.size)  # type: ignore[return-value]

    def to_meta(self) -> Dict[str, Any]:
        """Metadata without pixels (safe to log/serialize)."""
        w, h = self.size
        return {"width": w, "height": h, "pixel_ratio": self.pixel_ratio, "mode": getattr(self.image, "mode", None)}


class ImageStoreLike(Protocol):
    """The two map-style image calls the integration layer needs."""

    def load_image(self, url: str) -> Any: ...

    def add_image(self, key: str, image: Any, pixel_ratio: float = 1) -> Any: ...


def manifest_from_json(data: Any) -> List[AssetDescriptor]:
    if not isinstance(data, list):
        raise ValueError("assets.json must contain a list of asset descriptors")
    return [AssetDescriptor.from_dict(d) for d in data]
