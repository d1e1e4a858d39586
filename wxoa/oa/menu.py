"""Custom and conditional menus of an official account."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wxoa.action import Action, HTTPMethod
from wxoa.helpers import marshal_json

MENU_CREATE_URL = "https://api.weixin.qq.com/cgi-bin/menu/create"
MENU_ADD_CONDITIONAL_URL = "https://api.weixin.qq.com/cgi-bin/menu/addconditional"
MENU_TRY_MATCH_URL = "https://api.weixin.qq.com/cgi-bin/menu/trymatch"
MENU_LIST_URL = "https://api.weixin.qq.com/cgi-bin/menu/get"
MENU_DELETE_URL = "https://api.weixin.qq.com/cgi-bin/menu/delete"
MENU_DELETE_CONDITIONAL_URL = "https://api.weixin.qq.com/cgi-bin/menu/delconditional"


class MenuButtonType(str, Enum):
    """Kinds of menu buttons."""

    CLICK = "click"
    VIEW = "view"
    SCAN_CODE_PUSH = "scancode_push"
    SCAN_CODE_WAIT_MSG = "scancode_waitmsg"
    PIC_SYS_PHOTO = "pic_sysphoto"
    PIC_PHOTO_OR_ALBUM = "pic_photo_or_album"
    PIC_WEIXIN = "pic_weixin"
    LOCATION_SELECT = "location_select"
    MEDIA = "media_id"
    VIEW_LIMITED = "view_limited"
    MINIP = "miniprogram"


def _button_type(value: Any) -> MenuButtonType | str:
    text = str(value or "")
    try:
        return MenuButtonType(text)
    except ValueError:
        return text


@dataclass
class MenuButton:
    """A menu button; empty fields are left out when serialised."""

    type: MenuButtonType | str = ""
    name: str = ""
    key: str = ""
    url: str = ""
    appid: str = ""
    pagepath: str = ""
    media_id: str = ""
    sub_button: list[MenuButton] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, omitting empty fields."""
        kind = self.type.value if isinstance(self.type, MenuButtonType) else self.type
        pairs = [
            ("type", kind),
            ("name", self.name),
            ("key", self.key),
            ("url", self.url),
            ("appid", self.appid),
            ("pagepath", self.pagepath),
            ("media_id", self.media_id),
        ]
        result: dict[str, Any] = {name: value for name, value in pairs if value}
        if self.sub_button:
            result["sub_button"] = [button.to_dict() for button in self.sub_button]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuButton:
        """Build a button from its JSON form."""
        return cls(
            type=_button_type(data.get("type")),
            name=data.get("name") or "",
            key=data.get("key") or "",
            url=data.get("url") or "",
            appid=data.get("appid") or "",
            pagepath=data.get("pagepath") or "",
            media_id=data.get("media_id") or "",
            sub_button=_buttons_from_list(data.get("sub_button")),
        )


def _buttons_from_list(items: list[dict[str, Any]] | None) -> list[MenuButton]:
    return [MenuButton.from_dict(item) for item in items or []]


_MATCH_RULE_FIELDS = (
    "tag_id",
    "sex",
    "country",
    "province",
    "city",
    "client_platform_type",
    "language",
)


@dataclass
class MenuMatchRule:
    """Rule that decides which users see a conditional menu."""

    tag_id: str = ""
    sex: str = ""
    country: str = ""
    province: str = ""
    city: str = ""
    client_platform_type: str = ""
    language: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the JSON form, omitting empty fields."""
        return {
            name: getattr(self, name) for name in _MATCH_RULE_FIELDS if getattr(self, name)
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuMatchRule:
        """Build a rule from its JSON form."""
        return cls(**{name: str(data.get(name) or "") for name in _MATCH_RULE_FIELDS})


@dataclass
class Menu:
    """The default menu."""

    button: list[MenuButton] = field(default_factory=list)
    menuid: int = 0


@dataclass
class ConditionalMenu:
    """A menu shown to users that match its rule."""

    button: list[MenuButton] = field(default_factory=list)
    matchrule: MenuMatchRule = field(default_factory=MenuMatchRule)
    menuid: int = 0


@dataclass
class MenuInfo:
    """The default menu together with all conditional menus."""

    menu: Menu = field(default_factory=Menu)
    conditionalmenu: list[ConditionalMenu] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuInfo:
        """Build menu information from the query response."""
        menu_data = data.get("menu") or {}
        menu = Menu(
            button=_buttons_from_list(menu_data.get("button")),
            menuid=int(menu_data.get("menuid") or 0),
        )
        conditional = [
            ConditionalMenu(
                button=_buttons_from_list(item.get("button")),
                matchrule=MenuMatchRule.from_dict(item.get("matchrule") or {}),
                menuid=int(item.get("menuid") or 0),
            )
            for item in data.get("conditionalmenu") or []
        ]
        return cls(menu=menu, conditionalmenu=conditional)


def _button_list(buttons: tuple[MenuButton, ...]) -> list[MenuButton] | None:
    return list(buttons) if buttons else None


def create_menu(*buttons: MenuButton) -> Action:
    """Create the default menu."""
    return Action(
        MENU_CREATE_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json({"button": _button_list(buttons)}),
    )


def create_conditional_menu(match_rule: MenuMatchRule | None, *buttons: MenuButton) -> Action:
    """Create a conditional menu."""
    return Action(
        MENU_ADD_CONDITIONAL_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json({"button": _button_list(buttons), "matchrule": match_rule}),
    )


def _decode_try_match(data: bytes) -> list[MenuButton]:
    payload = json.loads(data)
    if not isinstance(payload, dict) or "button" not in payload:
        raise ValueError("response has no button list")
    return _buttons_from_list(payload["button"])


def try_match_menu(user_id: str) -> Action:
    """Show which menu a user (open id or WeChat id) would see."""
    return Action(
        MENU_TRY_MATCH_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json({"user_id": user_id}),
        decode=_decode_try_match,
    )


def get_menu() -> Action:
    """Query the default and conditional menus."""
    return Action(
        MENU_LIST_URL,
        method=HTTPMethod.GET,
        decode=lambda data: MenuInfo.from_dict(json.loads(data)),
    )


def delete_menu() -> Action:
    """Delete all menus."""
    return Action(MENU_DELETE_URL, method=HTTPMethod.GET)


def delete_conditional_menu(menu_id: str) -> Action:
    """Delete one conditional menu."""
    return Action(
        MENU_DELETE_CONDITIONAL_URL,
        method=HTTPMethod.POST,
        body=lambda: marshal_json({"menuid": menu_id}),
    )


def group_button(name: str, *buttons: MenuButton) -> MenuButton:
    """A button that opens a sub-menu."""
    return MenuButton(name=name, sub_button=list(buttons))


def click_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.CLICK, name=name, key=key)


def view_button(name: str, redirect_url: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.VIEW, name=name, url=redirect_url)


def scan_code_push_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.SCAN_CODE_PUSH, name=name, key=key)


def scan_code_wait_msg_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.SCAN_CODE_WAIT_MSG, name=name, key=key)


def pic_sys_photo_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.PIC_SYS_PHOTO, name=name, key=key)


def pic_photo_or_album_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.PIC_PHOTO_OR_ALBUM, name=name, key=key)


def pic_weixin_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.PIC_WEIXIN, name=name, key=key)


def location_select_button(name: str, key: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.LOCATION_SELECT, name=name, key=key)


def media_button(name: str, media_id: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.MEDIA, name=name, media_id=media_id)


def view_limited_button(name: str, media_id: str) -> MenuButton:
    return MenuButton(type=MenuButtonType.VIEW_LIMITED, name=name, media_id=media_id)


def minip_button(name: str, appid: str, pagepath: str, redirect_url: str) -> MenuButton:
    return MenuButton(
        type=MenuButtonType.MINIP,
        name=name,
        url=redirect_url,
        appid=appid,
        pagepath=pagepath,
    )