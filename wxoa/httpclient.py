"""HTTP client used to send API requests and collect response bodies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

from wxoa.action import UploadForm
from wxoa.helpers import format_map_to_xml

DEFAULT_TIMEOUT = 10.0

_JSON_CONTENT_TYPE = "application/json; charset=utf-8"
_XML_CONTENT_TYPE = "text/xml; charset=utf-8"


class HTTPStatusError(Exception):
    """Raised when the server answers with a status other than 200."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"error http code: {status_code}")
        self.status_code = status_code


@dataclass
class RequestOptions:
    """Per-request settings: extra headers, cookies, connection close and timeout."""

    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)
    close: bool = False
    timeout: float | None = None


def _without_content_type(headers: Mapping[str, str]) -> dict[str, str]:
    return {key: value for key, value in headers.items() if key.lower() != "content-type"}


class HTTPClient:
    """Sends GET, JSON POST, XML POST and multipart upload requests."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        cert: str | tuple[str, str] | None = None,
        verify: bool | str = True,
    ) -> None:
        self.timeout = timeout
        self._session = requests.Session()
        self._session.cert = cert
        self._session.verify = verify

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._session.close()

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        options: RequestOptions,
        **kwargs: Any,
    ) -> bytes:
        if options.close:
            headers["Connection"] = "close"
        timeout = options.timeout if options.timeout is not None else self.timeout
        response = self._session.request(
            method,
            url,
            headers=headers,
            cookies=dict(options.cookies) or None,
            timeout=timeout,
            **kwargs,
        )
        try:
            if response.status_code != 200:
                raise HTTPStatusError(response.status_code)
            return response.content
        finally:
            response.close()

    def get(self, url: str, options: RequestOptions | None = None) -> bytes:
        """Send a GET request and return the response body."""
        opts = options or RequestOptions()
        return self._send("GET", url, dict(opts.headers), opts)

    def post(
        self, url: str, body: bytes | None, options: RequestOptions | None = None
    ) -> bytes:
        """Send a JSON POST request and return the response body."""
        opts = options or RequestOptions()
        headers = _without_content_type(opts.headers)
        headers["Content-Type"] = _JSON_CONTENT_TYPE
        return self._send("POST", url, headers, opts, data=body or b"")

    def post_xml(
        self, url: str, body: Mapping[str, str], options: RequestOptions | None = None
    ) -> bytes:
        """Send a mapping as an XML POST request and return the response body."""
        opts = options or RequestOptions()
        payload = format_map_to_xml(body).encode("utf-8")
        headers = _without_content_type(opts.headers)
        headers["Content-Type"] = _XML_CONTENT_TYPE
        return self._send("POST", url, headers, opts, data=payload)

    def upload(
        self, url: str, form: UploadForm, options: RequestOptions | None = None
    ) -> bytes:
        """Send the form's media and extra fields as multipart data."""
        opts = options or RequestOptions()
        media = form.read()
        headers = _without_content_type(opts.headers)
        return self._send(
            "POST",
            url,
            headers,
            opts,
            files={form.fieldname: (form.filename, media)},
            data=dict(form.extra_fields) or None,
        )