"""Template, subscribe and customer-service messages of an official account."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wxoa.action import Action, HTTPMethod
from wxoa.helpers import marshal_json

TEMPLATE_LIST_URL = "https://api.weixin.qq.com/cgi-bin/template/get_all_private_template"
TEMPLATE_DELETE_URL = "https://api.weixin.qq.com/cgi-bin/template/del_private_template"
TEMPLATE_MESSAGE_SEND_URL = "https://api.weixin.qq.com/cgi-bin/message/template/send"
SUBSCRIBE_MESSAGE_SEND_URL = "https://api.weixin.qq.com/cgi-bin/message/template/subscribe"
KF_MESSAGE_SEND_URL = "https://api.weixin.qq.com/cgi-bin/message/custom/send"
SET_TYPING_URL = "https://api.weixin.qq.com/cgi-bin/message/custom/typing"

_TEMPLATE_FIELDS = (
    "template_id",
    "title",
    "primary_industry",
    "deputy_industry",
    "content",
    "example",
)


@dataclass
class TemplateInfo:
    """A message template owned by the account."""

    template_id: str = ""
    title: str = ""
    primary_industry: str = ""
    deputy_industry: str = ""
    content: str = ""
    example: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemplateInfo:
        """Build a template from its JSON form."""
        return cls(**{name: str(data.get(name) or "") for name in _TEMPLATE_FIELDS})


@dataclass
class MessageMinip:
    """Mini program a template message jumps to."""

    appid: str = ""
    pagepath: str = ""


@dataclass
class TemplateMessage:
    """A template message; ``data`` maps keywords to ``{"value": ..., "color": ...}``."""

    template_id: str = ""
    url: str = ""
    miniprogram: MessageMinip | None = None
    data: dict[str, dict[str, str]] = field(default_factory=dict)


@dataclass
class KFVideoMessage:
    """Customer-service video message."""

    media_id: str = ""
    thumb_media_id: str = ""
    title: str = ""
    description: str = ""


@dataclass
class KFMusicMessage:
    """Customer-service music message."""

    title: str = ""
    description: str = ""
    musicurl: str = ""
    hqmusicurl: str = ""
    thumb_media_id: str = ""


@dataclass
class KFArticle:
    """An article in a customer-service news message."""

    title: str = ""
    description: str = ""
    url: str = ""
    picurl: str = ""


@dataclass
class KFMenuOption:
    """One choice of a customer-service menu message."""

    id: str = ""
    content: str = ""


@dataclass
class KFMenuMessage:
    """Customer-service menu message."""

    head_content: str = ""
    tail_content: str = ""
    options: list[KFMenuOption] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form."""
        return {
            "head_content": self.head_content,
            "tail_content": self.tail_content,
            "list": [{"id": opt.id, "content": opt.content} for opt in self.options],
        }


@dataclass
class KFMinipMessage:
    """Customer-service mini program card message."""

    title: str = ""
    appid: str = ""
    pagepath: str = ""
    thumb_media_id: str = ""


class TypeCommand(str, Enum):
    """Typing state commands."""

    TYPING = "Typing"
    CANCEL_TYPING = "CancelTyping"


def _decode_template_list(data: bytes) -> list[TemplateInfo]:
    payload = json.loads(data)
    if not isinstance(payload, dict) or "template_list" not in payload:
        raise ValueError("response has no template list")
    return [TemplateInfo.from_dict(item) for item in payload["template_list"] or []]


def get_template_list() -> Action:
    """List the account's templates."""
    return Action(
        TEMPLATE_LIST_URL,
        method=HTTPMethod.GET,
        decode=_decode_template_list,
    )


def delete_template(template_id: str) -> Action:
    """Delete a template."""
    return Action(
        TEMPLATE_DELETE_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json({"template_id": template_id}),
    )


def _template_params(open_id: str, msg: TemplateMessage) -> dict[str, Any]:
    params: dict[str, Any] = {
        "touser": open_id,
        "template_id": msg.template_id,
        "data": msg.data,
    }
    if msg.url:
        params["url"] = msg.url
    if msg.miniprogram is not None:
        params["miniprogram"] = msg.miniprogram
    return params


def send_template_message(open_id: str, msg: TemplateMessage) -> Action:
    """Send a template message."""
    return Action(
        TEMPLATE_MESSAGE_SEND_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json(_template_params(open_id, msg)),
    )


def send_subscribe_message(
    open_id: str, scene: str, title: str, msg: TemplateMessage
) -> Action:
    """Send a one-time subscribe message."""

    def body() -> bytes:
        params = _template_params(open_id, msg)
        params["scene"] = scene
        params["title"] = title
        return marshal_json(params)

    return Action(SUBSCRIBE_MESSAGE_SEND_URL, method=HTTPMethod.POST, body=body)


def _kf_action(open_id: str, msgtype: str, content: Any, kf_account: str | None) -> Action:
    def body() -> bytes:
        data: dict[str, Any] = {
            "touser": open_id,
            "msgtype": msgtype,
            msgtype: content,
        }
        if kf_account is not None:
            data["customservice"] = {"kf_account": kf_account}
        return marshal_json(data)

    return Action(KF_MESSAGE_SEND_URL, method=HTTPMethod.POST, body=body)


def send_kf_text_message(open_id: str, text: str, kf_account: str | None = None) -> Action:
    """Send a customer-service text message."""
    return _kf_action(open_id, "text", {"content": text}, kf_account)


def send_kf_image_message(
    open_id: str, media_id: str, kf_account: str | None = None
) -> Action:
    """Send a customer-service image message."""
    return _kf_action(open_id, "image", {"media_id": media_id}, kf_account)


def send_kf_voice_message(
    open_id: str, media_id: str, kf_account: str | None = None
) -> Action:
    """Send a customer-service voice message."""
    return _kf_action(open_id, "voice", {"media_id": media_id}, kf_account)


def send_kf_video_message(
    open_id: str, msg: KFVideoMessage, kf_account: str | None = None
) -> Action:
    """Send a customer-service video message."""
    return _kf_action(open_id, "video", msg, kf_account)


def send_kf_music_message(
    open_id: str, msg: KFMusicMessage, kf_account: str | None = None
) -> Action:
    """Send a customer-service music message."""
    return _kf_action(open_id, "music", msg, kf_account)


def send_kf_news_message(
    open_id: str, articles: list[KFArticle], kf_account: str | None = None
) -> Action:
    """Send a customer-service news message linking to external pages."""
    return _kf_action(open_id, "news", {"articles": list(articles)}, kf_account)


def send_kf_mpnews_message(
    open_id: str, media_id: str, kf_account: str | None = None
) -> Action:
    """Send a customer-service news message linking to an article page."""
    return _kf_action(open_id, "mpnews", {"media_id": media_id}, kf_account)


def send_kf_menu_message(
    open_id: str, msg: KFMenuMessage, kf_account: str | None = None
) -> Action:
    """Send a customer-service menu message."""
    return _kf_action(open_id, "msgmenu", msg, kf_account)


def send_kf_card_message(
    open_id: str, card_id: str, kf_account: str | None = None
) -> Action:
    """Send a customer-service card message."""
    return _kf_action(open_id, "wxcard", {"card_id": card_id}, kf_account)


def send_kf_minip_message(
    open_id: str, msg: KFMinipMessage, kf_account: str | None = None
) -> Action:
    """Send a customer-service mini program card message."""
    return _kf_action(open_id, "miniprogrampage", msg, kf_account)


def set_typing(open_id: str, cmd: TypeCommand) -> Action:
    """Show or hide the typing state to a user."""
    return Action(
        SET_TYPING_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json({"touser": open_id, "command": cmd}),
    )