"""Passive replies to messages pushed to an official account."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import ClassVar

_CDATA_END = "]]>"


def _now() -> int:
    return int(time.time())


def _cdata(text: str) -> str:
    if not text:
        return ""
    # A literal "]]>" cannot appear inside one section, so split it across two.
    return "<![CDATA[" + text.replace(_CDATA_END, "]]]]><![CDATA[>") + "]]>"


def _element(name: str, text: str) -> str:
    return f"<{name}>{_cdata(text)}</{name}>"


def _optional(name: str, text: str) -> str:
    return _element(name, text) if text else ""


@dataclass
class Reply:
    """Base of all replies; subclasses provide the message type and body."""

    msg_type: ClassVar[str] = ""

    create_time: int = field(default_factory=_now, kw_only=True)

    def _body(self) -> str:
        return ""

    def to_xml(self, from_user: str, to_user: str) -> bytes:
        """Render the reply as the XML document sent back to the server."""
        parts = [
            "<xml>",
            _element("FromUserName", from_user),
            _element("ToUserName", to_user),
            f"<CreateTime>{self.create_time}</CreateTime>",
            _element("MsgType", self.msg_type),
            self._body(),
            "</xml>",
        ]
        return "".join(parts).encode("utf-8")


@dataclass
class TextReply(Reply):
    """Text reply."""

    msg_type: ClassVar[str] = "text"

    content: str = ""

    def _body(self) -> str:
        return _element("Content", self.content)


@dataclass
class ImageReply(Reply):
    """Image reply referring to an uploaded media id."""

    msg_type: ClassVar[str] = "image"

    media_id: str = ""

    def _body(self) -> str:
        return f"<Image>{_element('MediaId', self.media_id)}</Image>"


@dataclass
class VoiceReply(Reply):
    """Voice reply referring to an uploaded media id."""

    msg_type: ClassVar[str] = "voice"

    media_id: str = ""

    def _body(self) -> str:
        return f"<Voice>{_element('MediaId', self.media_id)}</Voice>"


@dataclass
class VideoReply(Reply):
    """Video reply; title and description may be empty."""

    msg_type: ClassVar[str] = "video"

    media_id: str = ""
    title: str = ""
    description: str = ""

    def _body(self) -> str:
        inner = (
            _element("MediaId", self.media_id)
            + _optional("Title", self.title)
            + _optional("Description", self.description)
        )
        return f"<Video>{inner}</Video>"


@dataclass
class MusicReply(Reply):
    """Music reply."""

    msg_type: ClassVar[str] = "music"

    title: str = ""
    description: str = ""
    music_url: str = ""
    hq_music_url: str = ""
    thumb_media_id: str = ""

    def _body(self) -> str:
        inner = (
            _optional("Title", self.title)
            + _optional("Description", self.description)
            + _optional("MusicUrl", self.music_url)
            + _optional("HQMusicUrl", self.hq_music_url)
            + _element("ThumbMediaId", self.thumb_media_id)
        )
        return f"<Music>{inner}</Music>"


@dataclass
class Article:
    """One article of a news reply."""

    title: str = ""
    description: str = ""
    pic_url: str = ""
    url: str = ""

    def to_xml_fragment(self) -> str:
        """Render the article as an ``<item>`` element."""
        return (
            "<item>"
            + _element("Title", self.title)
            + _element("Description", self.description)
            + _element("PicUrl", self.pic_url)
            + _element("Url", self.url)
            + "</item>"
        )


@dataclass
class NewsReply(Reply):
    """News reply holding up to ten articles; the first one is shown large."""

    msg_type: ClassVar[str] = "news"

    article_count: int = 0
    articles: list[Article] = field(default_factory=list)

    def _body(self) -> str:
        body = f"<ArticleCount>{self.article_count}</ArticleCount>"
        if self.articles:
            items = "".join(article.to_xml_fragment() for article in self.articles)
            body += f"<Articles>{items}</Articles>"
        return body


@dataclass
class Transfer2KFReply(Reply):
    """Hands the message over to customer service, optionally to one account."""

    msg_type: ClassVar[str] = "transfer_customer_service"

    kf_account: str | None = None

    def _body(self) -> str:
        if self.kf_account is None:
            return ""
        return f"<TransInfo>{_element('KfAccount', self.kf_account)}</TransInfo>"


def new_text_reply(content: str) -> TextReply:
    """Reply with text."""
    return TextReply(content=content)


def new_image_reply(media_id: str) -> ImageReply:
    """Reply with an image."""
    return ImageReply(media_id=media_id)


def new_voice_reply(media_id: str) -> VoiceReply:
    """Reply with a voice message."""
    return VoiceReply(media_id=media_id)


def new_video_reply(media_id: str, title: str, desc: str) -> VideoReply:
    """Reply with a video."""
    return VideoReply(media_id=media_id, title=title, description=desc)


def new_music_reply(
    thumb_media_id: str, title: str, desc: str, music_url: str, hq_music_url: str
) -> MusicReply:
    """Reply with music."""
    return MusicReply(
        title=title,
        description=desc,
        music_url=music_url,
        hq_music_url=hq_music_url,
        thumb_media_id=thumb_media_id,
    )


def new_news_reply(count: int, *articles: Article) -> NewsReply:
    """Reply with articles."""
    return NewsReply(article_count=count, articles=list(articles))


def new_transfer_to_kf_reply(kf_account: str | None = None) -> Transfer2KFReply:
    """Transfer the conversation to customer service."""
    return Transfer2KFReply(kf_account=kf_account)