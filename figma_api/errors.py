from __future__ import annotations

from typing import Optional, Sequence


class FigmaApiError(RuntimeError):
    """Non-success HTTP status from the Figma API."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = int(status_code)
        self.detail = detail
        msg = f"HTTP error {self.status_code} accessing Figma."
        if detail:
            msg = f"{msg} {detail}"
        super().__init__(msg)


class NoMatchingFramesError(LookupError):
    """None of the requested frame ids/names resolved to a node in the file."""

    def __init__(self, frame_ids: Sequence[str] = (), frame_names: Sequence[str] = ()):
        self.frame_ids = list(frame_ids)
        self.frame_names = list(frame_names)
        super().__init__(
            f"No matching frames for ids={self.frame_ids}, names={self.frame_names}"
        )
