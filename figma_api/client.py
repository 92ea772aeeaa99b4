from __future__ import annotations

"""
Figma REST API client.

Usage:
    api = FigmaApi()  # requires FIGMA_TOKEN in env or token=...
    file = api.get("files/FILE_KEY")
    images = api.get("images/FILE_KEY", {"ids": ["1:2", "1:3"], "format": "png", "scale": 2})
"""

import os
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from common.logging_setup import get_logger
from figma_api.errors import FigmaApiError


log = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.figma.com/v1"
TOKEN_HEADER = "X-Figma-Token"


def encode_params(params: Optional[Mapping[str, Any]]) -> str:
    """
    Query string for the Figma API. Sequences are comma-joined ("ids=1:2,1:3"),
    everything else is stringified. None values are dropped.
    """
    if not params:
        return ""
    flat: Dict[str, str] = {}
    for k, v in params.items():
        if v is None:
            continue
        if isinstance(v, (list, tuple)):
            flat[k] = ",".join(str(x) for x in v)
        elif isinstance(v, float):
            flat[k] = f"{v:g}"  # 2.0 -> "2"
        else:
            flat[k] = str(v)
    return urlencode(flat)


class FigmaApi:
    def __init__(
        self,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        """
        Params:
            token: personal access token (falls back to env FIGMA_TOKEN)
            session: requests.Session-like object used for every GET
            base_url: API root, no trailing slash
            timeout: per-request timeout in seconds
        """
        self.token = token or os.getenv("FIGMA_TOKEN")
        if not self.token:
            raise ValueError(
                "Figma access token is required. "
                "Set FIGMA_TOKEN environment variable or pass token=..."
            )
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_url(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        query = encode_params(params)
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        return f"{url}?{query}" if query else url

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        GET `endpoint` and return the decoded JSON body.

        Raises:
            FigmaApiError: status >= 400. The body's `err`/`message` field is
                appended when the body decodes; a body that does not decode is
                ignored and the bare status is reported.
        """
        url = self.build_url(endpoint, params)
        log.debug("GET %s", url)
        r = self.session.get(url, headers={TOKEN_HEADER: self.token}, timeout=self.timeout)
        if r.status_code >= 400:
            detail = self._error_detail(r)
            log.warning("Figma request failed: %s %s %s", r.status_code, endpoint, detail or "")
            raise FigmaApiError(r.status_code, detail)
        return r.json()

    @staticmethod
    def _error_detail(response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError as e:
            log.debug("Error body is not JSON: %s", e)
            return None
        if isinstance(body, dict):
            detail = body.get("err") or body.get("message")
            return None if detail is None else str(detail)
        return None
