"""
Map image store integration

- store.ImageStore: named images with a pixel ratio (map-style load_image/add_image)
- integration: register Figma image records at their best scale
- snapshot: export/load a static `assets.json` snapshot of an asset set

Usage examples:
    from map_store import ImageStore, load_figmassets, load_stored_figmassets
    store = ImageStore()
    load_figmassets(store, file_key="FILE_KEY", frame_names=["icons"])
    load_stored_figmassets(store, "https://cdn.example.com/icons")
"""
from .store import ImageStore
from .integration import add_assets_to_map, best_scale, load_figmassets
from .snapshot import export_snapshot, load_stored_figmassets

__all__ = [
    "ImageStore",
    "add_assets_to_map",
    "best_scale",
    "load_figmassets",
    "export_snapshot",
    "load_stored_figmassets",
]
