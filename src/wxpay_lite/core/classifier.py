"""Success/failure classification of gateway responses.

Two protocol generations report status differently:

- Legacy XML carries a transport status (``return_code``) and a business
  status (``result_code``); both must be ``SUCCESS``.
- Modern JSON carries ``code``/``message`` only on failure.

Error codes are gateway-defined and passed through unmodified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from wxpay_lite.exceptions import GatewayBusinessError, UnknownGatewayError, WxPayError

SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class LegacyEnvelope:
    """Status fields of a legacy XML response."""

    return_code: str = ""
    return_msg: str = ""
    result_code: str = ""
    err_code: str = ""
    err_code_des: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LegacyEnvelope":
        return cls(
            return_code=data.get("return_code") or "",
            return_msg=data.get("return_msg") or "",
            result_code=data.get("result_code") or "",
            err_code=data.get("err_code") or "",
            err_code_des=data.get("err_code_des") or "",
        )


@dataclass(frozen=True)
class ModernEnvelope:
    """Status fields of a modern JSON response."""

    code: str = ""
    message: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ModernEnvelope":
        return cls(
            code=str(data.get("code") or ""),
            message=str(data.get("message") or ""),
        )


ResponseEnvelope = Union[LegacyEnvelope, ModernEnvelope]


@dataclass(frozen=True)
class Verdict:
    """Outcome of classifying one envelope.

    Attributes:
        success: Whether the gateway accepted the request.
        error: Structured error if it did not, None otherwise.
    """

    success: bool
    error: Optional[WxPayError] = None

    @classmethod
    def ok(cls) -> "Verdict":
        return cls(success=True)

    @classmethod
    def fail(cls, error: WxPayError) -> "Verdict":
        return cls(success=False, error=error)

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


def _unexpected_status(status_code: Optional[int]) -> Optional[int]:
    if status_code is None or status_code == 200:
        return None
    return status_code


def classify_legacy(envelope: LegacyEnvelope, status_code: Optional[int] = None) -> Verdict:
    if envelope.return_code == SUCCESS and envelope.result_code == SUCCESS:
        return Verdict.ok()
    if not envelope.err_code:
        return Verdict.fail(
            UnknownGatewayError(
                return_code=envelope.return_code,
                return_msg=envelope.return_msg,
                status_code=_unexpected_status(status_code),
            )
        )
    return Verdict.fail(GatewayBusinessError(envelope.err_code, envelope.err_code_des))


def classify_modern(envelope: ModernEnvelope, status_code: Optional[int] = None) -> Verdict:
    if envelope.code:
        return Verdict.fail(GatewayBusinessError(envelope.code, envelope.message))
    unexpected = _unexpected_status(status_code)
    if unexpected is not None:
        # A body without an error code is only trusted on a 200.
        return Verdict.fail(UnknownGatewayError(status_code=unexpected))
    return Verdict.ok()


def classify(envelope: ResponseEnvelope, status_code: Optional[int] = None) -> Verdict:
    """Classify either envelope variant.

    Args:
        envelope: Parsed status fields.
        status_code: Out-of-band HTTP status, when the caller has one.

    Returns:
        Verdict with the structured error on failure.
    """
    if isinstance(envelope, LegacyEnvelope):
        return classify_legacy(envelope, status_code)
    if isinstance(envelope, ModernEnvelope):
        return classify_modern(envelope, status_code)
    raise TypeError(f"Unsupported envelope type: {type(envelope).__name__}")
