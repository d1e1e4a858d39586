from dataclasses import dataclass

import pytest

from wxoa.helpers import (
    decode_uint32,
    encode_uint32,
    format_map_to_xml,
    marshal_json,
    marshal_no_escape_html,
    parse_xml_to_map,
)


def test_wxml_round_trip():
    m = {
        "appid": "wx2421b1c4370ec43b",
        "partnerid": "10000100",
        "prepayid": "WX1217752501201407033233368018",
        "package": "Sign=WXPay",
        "noncestr": "5K8264ILTKCH16CQ2502SI8ZNMTM67VS",
        "timestamp": "1514363815",
    }
    x = format_map_to_xml(m)
    assert parse_xml_to_map(x.encode()) == m


def test_wxml_round_trip_special_characters():
    m = {"a": "x<y & \"z\" 'w'", "b": "line1\nline2\tend"}
    assert parse_xml_to_map(format_map_to_xml(m)) == m


def test_format_map_to_xml_escapes():
    assert format_map_to_xml({"a": "<&>"}) == "<xml><a>&lt;&amp;&gt;</a></xml>"


def test_parse_skips_nested_and_reads_cdata():
    data = b"<xml><a><![CDATA[x<y]]></a><b><c>1</c></b><d>2</d></xml>"
    assert parse_xml_to_map(data) == {"a": "x<y", "d": "2"}


def test_parse_empty_input():
    assert parse_xml_to_map(b"") == {}


def test_parse_invalid_xml_raises():
    with pytest.raises(ValueError):
        parse_xml_to_map(b"<xml><a></xml>")


def test_uint32_round_trip():
    i = 250
    assert decode_uint32(encode_uint32(i)) == i


def test_encode_uint32_big_endian():
    assert encode_uint32(1) == b"\x00\x00\x00\x01"


def test_encode_uint32_out_of_range():
    with pytest.raises(ValueError):
        encode_uint32(1 << 32)


def test_decode_uint32_wrong_length():
    assert decode_uint32(b"\x01\x02\x03") == 0


def test_marshal_with_no_escape_html():
    b = marshal_no_escape_html(
        {
            "action": "long2short",
            "long_url": "http://wap.koudaitong.com/v2/showcase/goods?alias=128wi9shh&spm=h56083&redirect_count=1",
        }
    )
    assert (
        b.decode()
        == '{"action":"long2short","long_url":"http://wap.koudaitong.com/v2/showcase/goods?alias=128wi9shh&spm=h56083&redirect_count=1"}'
    )


def test_marshal_json_escapes_html():
    assert marshal_json({"u": "a&b<c>"}) == b'{"u":"a\\u0026b\\u003cc\\u003e"}'


def test_marshal_json_sorts_map_keys():
    assert marshal_json({"b": 1, "a": 2}) == b'{"a":2,"b":1}'


def test_marshal_json_keeps_unicode():
    assert marshal_json({"name": "菜单"}) == '{"name":"菜单"}'.encode()


def test_marshal_json_keeps_to_dict_order():
    class Item:
        def to_dict(self):
            return {"z": 1, "a": 2}

    assert marshal_json({"item": Item()}) == b'{"item":{"z":1,"a":2}}'


def test_marshal_json_dataclass_field_order():
    @dataclass
    class Pair:
        second: str
        first: str

    assert marshal_json(Pair("x", "y")) == b'{"second":"x","first":"y"}'


def test_marshal_json_rejects_unknown_type():
    with pytest.raises(TypeError):
        marshal_json({"x": object()})