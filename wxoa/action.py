"""Description of a single API call: URL, method, body, upload form and decoder."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import requests


class HTTPMethod(str, Enum):
    """How an action is sent."""

    GET = "GET"
    POST = "POST"
    UPLOAD = "UPLOAD"


@dataclass
class UploadForm:
    """A multipart file field, read from a local file or a remote resource."""

    fieldname: str = ""
    filename: str = ""
    resource_url: str = ""
    extra_fields: dict[str, str] = field(default_factory=dict)

    def read(self) -> bytes:
        """Return the media bytes to upload."""
        if self.resource_url:
            with requests.get(self.resource_url) as response:
                if response.status_code != 200:
                    raise requests.HTTPError(
                        f"error http code: {response.status_code}", response=response
                    )
                return response.content
        return Path(self.filename).resolve().read_bytes()


@dataclass
class Action:
    """An API request together with the way its response is decoded."""

    req_url: str
    method: HTTPMethod = HTTPMethod.GET
    query: dict[str, str] = field(default_factory=dict)
    body: Callable[[], bytes] | None = None
    wxml: Callable[[str, str, str], dict[str, str]] | None = None
    upload_form: UploadForm | None = None
    decode: Callable[[bytes], Any] | None = None
    tls: bool = False

    def render_url(self, access_token: str | None = None) -> str:
        """Build the request URL, adding ``access_token`` when given."""
        params = dict(self.query)
        if access_token is not None:
            params["access_token"] = access_token
        if not params:
            return self.req_url
        return f"{self.req_url}?{urlencode(sorted(params.items()))}"

    def render_body(self) -> bytes | None:
        """Return the request body, or ``None`` when the action has none."""
        if self.body is None:
            return None
        return self.body()

    def render_wxml(self, appid: str, mchid: str, nonce: str) -> dict[str, str]:
        """Return the XML body fields, or an empty mapping."""
        if self.wxml is None:
            return {}
        return self.wxml(appid, mchid, nonce)

    def decode_response(self, data: bytes) -> Any:
        """Decode a response body; ``None`` when the action has no decoder."""
        if self.decode is None:
            return None
        return self.decode(data)