"""
Tests for response classification

Covers:
- Legacy envelope (return_code / result_code / err_code)
- Modern envelope (code / message)
- HTTP status annotation
- Error messages and pass-through of gateway codes
"""
import pytest

from wxpay_lite.core.classifier import (
    LegacyEnvelope,
    ModernEnvelope,
    Verdict,
    classify,
)
from wxpay_lite.exceptions import GatewayBusinessError, UnknownGatewayError


# ============== Legacy Tests ==============

class TestClassifyLegacy:
    """Test legacy XML status classification"""

    def test_success(self):
        verdict = classify(LegacyEnvelope(return_code="SUCCESS", result_code="SUCCESS"))
        assert verdict.success
        assert verdict.error is None

    def test_business_error(self):
        envelope = LegacyEnvelope(
            return_code="SUCCESS",
            result_code="FAIL",
            err_code="ORDERPAID",
            err_code_des="order paid",
        )
        verdict = classify(envelope)
        assert not verdict.success
        assert isinstance(verdict.error, GatewayBusinessError)
        assert verdict.error.code == "ORDERPAID"
        assert verdict.error.description == "order paid"
        assert str(verdict.error) == "ORDERPAID: order paid"

    def test_insufficient_balance_vector(self):
        envelope = LegacyEnvelope(
            return_code="SUCCESS",
            result_code="FAIL",
            err_code="NOTENOUGH",
            err_code_des="balance insufficient",
        )
        verdict = classify(envelope)
        assert isinstance(verdict.error, GatewayBusinessError)
        assert str(verdict.error) == "NOTENOUGH: balance insufficient"

    def test_transport_failure_without_code(self):
        envelope = LegacyEnvelope(return_code="FAIL", return_msg="签名错误")
        verdict = classify(envelope)
        assert isinstance(verdict.error, UnknownGatewayError)
        assert verdict.error.return_code == "FAIL"
        assert verdict.error.return_msg == "签名错误"
        assert str(verdict.error) == "FAIL (签名错误)"

    def test_result_success_alone_is_not_enough(self):
        verdict = classify(LegacyEnvelope(return_code="FAIL", result_code="SUCCESS"))
        assert not verdict.success
        assert isinstance(verdict.error, UnknownGatewayError)

    def test_empty_envelope_is_unknown(self):
        verdict = classify(LegacyEnvelope())
        assert isinstance(verdict.error, UnknownGatewayError)
        assert str(verdict.error) == "UNKNOWN"

    def test_unknown_annotated_with_http_status(self):
        verdict = classify(LegacyEnvelope(), status_code=502)
        assert verdict.error.status_code == 502
        assert str(verdict.error) == "UNKNOWN: unexpected HTTP status 502"

    def test_status_200_not_annotated(self):
        verdict = classify(LegacyEnvelope(return_code="FAIL", return_msg="x"), status_code=200)
        assert verdict.error.status_code is None

    def test_err_code_with_empty_description(self):
        verdict = classify(LegacyEnvelope(return_code="SUCCESS", result_code="FAIL", err_code="SYSTEMERROR"))
        assert str(verdict.error) == "SYSTEMERROR: "

    def test_from_mapping_ignores_other_fields(self):
        envelope = LegacyEnvelope.from_mapping({
            "return_code": "SUCCESS",
            "result_code": "SUCCESS",
            "prepay_id": "wx1",
        })
        assert classify(envelope).success


# ============== Modern Tests ==============

class TestClassifyModern:
    """Test modern JSON status classification"""

    def test_success(self):
        assert classify(ModernEnvelope()).success

    def test_success_with_status_200(self):
        assert classify(ModernEnvelope(), status_code=200).success

    def test_business_error(self):
        verdict = classify(ModernEnvelope(code="PARAM_ERROR", message="bad"), status_code=400)
        assert isinstance(verdict.error, GatewayBusinessError)
        assert str(verdict.error) == "PARAM_ERROR: bad"

    def test_invalid_openid_vector(self):
        verdict = classify(ModernEnvelope(code="PARAM_ERROR", message="invalid openid"))
        assert not verdict.success
        assert isinstance(verdict.error, GatewayBusinessError)
        assert str(verdict.error) == "PARAM_ERROR: invalid openid"

    def test_code_without_message(self):
        verdict = classify(ModernEnvelope(code="NOT_ENOUGH"))
        assert str(verdict.error) == "NOT_ENOUGH: "

    def test_unexpected_status_without_code(self):
        verdict = classify(ModernEnvelope(), status_code=500)
        assert isinstance(verdict.error, UnknownGatewayError)
        assert verdict.error.status_code == 500

    def test_from_mapping(self):
        envelope = ModernEnvelope.from_mapping({"code": "SYSTEM_ERROR", "message": "busy", "detail": {}})
        assert envelope == ModernEnvelope(code="SYSTEM_ERROR", message="busy")

    def test_from_mapping_success_body(self):
        assert ModernEnvelope.from_mapping({"batch_id": "1"}) == ModernEnvelope()


class TestVerdict:
    """Test Verdict helpers"""

    def test_raise_for_error(self):
        verdict = Verdict.fail(GatewayBusinessError("ORDERCLOSED", "closed"))
        with pytest.raises(GatewayBusinessError, match="ORDERCLOSED"):
            verdict.raise_for_error()

    def test_ok_does_not_raise(self):
        Verdict.ok().raise_for_error()

    def test_unsupported_envelope(self):
        with pytest.raises(TypeError):
            classify({"return_code": "SUCCESS"})
