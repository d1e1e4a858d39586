"""QR codes and short links for promoting an official account."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from wxoa.action import Action, HTTPMethod
from wxoa.helpers import marshal_json, marshal_no_escape_html

QRCODE_CREATE_URL = "https://api.weixin.qq.com/cgi-bin/qrcode/create"
SHORT_URL_GENERATE_URL = "https://api.weixin.qq.com/cgi-bin/shorturl"


@dataclass
class QRCode:
    """A created QR code ticket."""

    ticket: str = ""
    expire_seconds: int = 0
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QRCode:
        """Build a QR code from its JSON form."""
        return cls(
            ticket=str(data.get("ticket") or ""),
            expire_seconds=int(data.get("expire_seconds") or 0),
            url=str(data.get("url") or ""),
        )


def _decode_qrcode(data: bytes) -> QRCode:
    return QRCode.from_dict(json.loads(data))


def create_temp_qrcode(scene_id: int, expire_seconds: int | None = None) -> Action:
    """Create a temporary QR code; without ``expire_seconds`` the server default applies."""

    def body() -> bytes:
        params: dict[str, Any] = {
            "action_name": "QR_SCENE",
            "action_info": {"scene": {"scene_id": scene_id}},
        }
        if expire_seconds is not None:
            params["expire_seconds"] = expire_seconds
        return marshal_json(params)

    return Action(
        QRCODE_CREATE_URL,
        method=HTTPMethod.POST,
        body=body,
        decode=_decode_qrcode,
    )


def create_perm_qrcode(scene_id: int) -> Action:
    """Create a permanent QR code."""
    return Action(
        QRCODE_CREATE_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json(
            {
                "action_name": "QR_LIMIT_SCENE",
                "action_info": {"scene": {"scene_id": scene_id}},
            }
        ),
        decode=_decode_qrcode,
    )


def _decode_short_url(data: bytes) -> str:
    payload = json.loads(data)
    if not isinstance(payload, dict):
        return ""
    value = payload.get("short_url")
    return "" if value is None else str(value)


def long_to_short_url(long_url: str) -> Action:
    """Convert a long link into a short one; decodes to the short link."""
    return Action(
        SHORT_URL_GENERATE_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_no_escape_html({"action": "long2short", "long_url": long_url}),
        decode=_decode_short_url,
    )