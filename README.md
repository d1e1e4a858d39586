# wxoa

Building blocks for talking to the WeChat Official Account API.

The package is organised around *actions*: `wxoa.action.Action` objects
that hold the endpoint, HTTP method, query parameters and request body of
one API call, and know how to decode its response. A separate
`wxoa.httpclient.HTTPClient` sends the request; you choose which client
method to call from `action.method`.

## Installation

```
pip install wxoa
```

With the test dependencies:

```
pip install "wxoa[test]"
```

## Quick start

```python
from wxoa.httpclient import HTTPClient
from wxoa.oa.menu import create_menu, click_button, group_button, view_button

action = create_menu(
    click_button("Today's song", "V1001_TODAY_MUSIC"),
    group_button("Menu", view_button("Search", "http://www.example.com/")),
)

access_token = "token"
with HTTPClient() as client:
    raw = client.post(action.render_url(access_token), action.render_body())
result = action.decode_response(raw)  # None: this action has no decoder
```

- `Action.render_url(access_token=None)` returns the URL with the query
  parameters (and `access_token`, when given) encoded in sorted order.
- `Action.render_body()` returns the JSON payload as bytes, or `None`.
- `Action.render_wxml(appid, mchid, nonce)` returns the XML body fields,
  or an empty dict.
- `Action.decode_response(data)` turns the raw response into Python
  objects, e.g. a `MenuInfo` for `get_menu()`, a list of `MenuButton` for
  `try_match_menu(...)`, a list of `TemplateInfo` for
  `get_template_list()`, a `QRCode` for `create_temp_qrcode(...)` or the
  short link string for `long_to_short_url(...)`. Actions without a
  decoder return `None`.

## Modules

- `wxoa.oa.menu` – `create_menu`, `create_conditional_menu` (with a
  `MenuMatchRule`), `try_match_menu`, `get_menu`, `delete_menu`,
  `delete_conditional_menu`, and button factories: `group_button`,
  `click_button`, `view_button`, `scan_code_push_button`,
  `scan_code_wait_msg_button`, `pic_sys_photo_button`,
  `pic_photo_or_album_button`, `pic_weixin_button`,
  `location_select_button`, `media_button`, `view_limited_button`,
  `minip_button`. `MenuButton.to_dict()` leaves out empty fields.
- `wxoa.oa.message` – `get_template_list`, `delete_template`,
  `send_template_message` and `send_subscribe_message` (with a
  `TemplateMessage`), customer-service messages
  (`send_kf_text_message`, `send_kf_image_message`,
  `send_kf_voice_message`, `send_kf_video_message`,
  `send_kf_music_message`, `send_kf_news_message`,
  `send_kf_mpnews_message`, `send_kf_menu_message`,
  `send_kf_card_message`, `send_kf_minip_message`, each taking an optional
  `kf_account`) and `set_typing` with a `TypeCommand`.
- `wxoa.oa.popularize` – `create_temp_qrcode(scene_id, expire_seconds=None)`,
  `create_perm_qrcode(scene_id)` and `long_to_short_url(long_url)`.
- `wxoa.oa.reply` – passive XML replies to pushed messages:
  `new_text_reply`, `new_image_reply`, `new_voice_reply`,
  `new_video_reply`, `new_music_reply`, `new_news_reply` (with `Article`
  items) and `new_transfer_to_kf_reply`. Each reply records its
  `create_time` when built and renders with `to_xml(from_user, to_user)`:

  ```python
  from wxoa.oa.reply import new_text_reply

  xml_bytes = new_text_reply("Hello").to_xml("gh_account", "user_openid")
  ```

- `wxoa.helpers` – `format_map_to_xml`, `parse_xml_to_map` (raises
  `ValueError` on malformed XML), `encode_uint32`, `decode_uint32`,
  `marshal_json` (compact JSON, plain dicts with sorted keys, `<`, `>` and
  `&` escaped) and `marshal_no_escape_html` (the same without HTML
  escaping).
- `wxoa.crypto` – AES in CBC and ECB modes (`CBCCrypto`, `ECBCrypto`)
  with a `PaddingMode` of `ZERO`, `PKCS5` or `PKCS7` (or `None` for no
  padding), the padding helpers `zero_padding`, `zero_unpadding`,
  `pkcs5_padding`, `pkcs5_unpadding`, and RSA PKCS#1 v1.5 with PEM keys
  (`rsa_encrypt`, `rsa_decrypt`).
- `wxoa.httpclient` – `HTTPClient(timeout=10.0, cert=None, verify=True)`
  with `get`, `post` (JSON), `post_xml` (a dict sent as XML) and `upload`
  (multipart, from an `UploadForm` that reads a local file or a
  `resource_url`). Per-request `RequestOptions` set headers, cookies,
  `close` and `timeout`. A status other than 200 raises
  `HTTPStatusError`.

## What the package does not do

- It does not obtain or refresh access tokens; pass one to
  `Action.render_url`.
- There is no client object that runs an action end to end: you pick
  `HTTPClient.get`, `post`, `post_xml` or `upload` yourself and feed the
  response to `Action.decode_response`. Error codes in a 200 response body
  are not checked.
- It has no actions for media and material uploads, OCR or subscriber
  management, and it does not parse or verify incoming pushed messages;
  only replies to them are built.
- It has no command-line program and no server.