"""
Tests for the legacy XML codec

Covers:
- Marshalling ordered pairs into <xml>
- Unmarshalling flat documents, CDATA included
- Malformed bodies
"""
import pytest

from wxpay_lite.codec import from_xml, to_xml
from wxpay_lite.exceptions import TransportError


class TestToXml:
    """Test request marshalling"""

    def test_root_and_order(self):
        body = to_xml([("mch_id", "10000100"), ("appid", "wx1"), ("sign", "ABC")])
        text = body.decode("utf-8")
        assert text.startswith("<xml>")
        assert text.index("<mch_id>") < text.index("<appid>") < text.index("<sign>")

    def test_escapes_markup(self):
        body = to_xml([("body", "a<b & c")])
        assert b"a&lt;b &amp; c" in body
        assert from_xml(body) == {"body": "a<b & c"}

    def test_utf8(self):
        assert from_xml(to_xml([("body", "腾讯充值中心-QQ会员充值")])) == {"body": "腾讯充值中心-QQ会员充值"}


class TestFromXml:
    """Test response unmarshalling"""

    def test_cdata(self):
        data = from_xml(
            "<xml><return_code><![CDATA[SUCCESS]]></return_code>"
            "<return_msg><![CDATA[OK]]></return_msg></xml>"
        )
        assert data == {"return_code": "SUCCESS", "return_msg": "OK"}

    def test_pretty_printed(self):
        data = from_xml(b"<xml>\n  <appid>wx1</appid>\n  <mch_id>1</mch_id>\n</xml>\n")
        assert data == {"appid": "wx1", "mch_id": "1"}

    def test_empty_element(self):
        assert from_xml("<xml><attach/></xml>") == {"attach": ""}

    def test_value_not_stripped(self):
        assert from_xml("<xml><body> a b </body></xml>") == {"body": " a b "}

    def test_comments_skipped(self):
        assert from_xml("<xml><!-- note --><appid>wx1</appid></xml>") == {"appid": "wx1"}

    @pytest.mark.parametrize("body", [b"", b"not xml", b"<xml><a></xml>", b'{"code": "x"}'])
    def test_malformed(self, body):
        with pytest.raises(TransportError):
            from_xml(body)
