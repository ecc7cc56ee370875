"""Shared request/response plumbing for endpoint models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from wxpay_lite.core.classifier import LegacyEnvelope, ModernEnvelope, Verdict, classify
from wxpay_lite.core.fields import FieldSpec


class LegacyRequest(Protocol):
    """A request for the XML protocol.

    ``wire_fields`` returns every declared field except ``sign``, in wire
    order, with the merchant id and nonce filled in.
    """

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]: ...


def as_int(data: Mapping[str, Any], key: str) -> int:
    """Integer field, 0 when absent or empty."""
    value = data.get(key)
    if value in (None, ""):
        return 0
    return int(value)


def as_time(
    data: Mapping[str, Any],
    key: str,
    decode: Callable[[str], datetime],
) -> Optional[datetime]:
    """Timestamp field decoded with ``decode``, None when absent or empty."""
    value = data.get(key)
    if not value:
        return None
    return decode(value)


@dataclass
class LegacyResponse:
    """Status fields common to every XML response."""

    return_code: str = ""
    return_msg: str = ""
    result_code: str = ""
    err_code: str = ""
    err_code_des: str = ""
    nonce_str: str = ""
    sign: str = ""
    raw: Dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def envelope(self) -> LegacyEnvelope:
        return LegacyEnvelope(
            return_code=self.return_code,
            return_msg=self.return_msg,
            result_code=self.result_code,
            err_code=self.err_code,
            err_code_des=self.err_code_des,
        )

    def verdict(self) -> Verdict:
        return classify(self.envelope)

    def success(self) -> bool:
        return self.verdict().success

    @staticmethod
    def status_kwargs(data: Mapping[str, str]) -> Dict[str, Any]:
        return {
            "return_code": data.get("return_code", ""),
            "return_msg": data.get("return_msg", ""),
            "result_code": data.get("result_code", ""),
            "err_code": data.get("err_code", ""),
            "err_code_des": data.get("err_code_des", ""),
            "nonce_str": data.get("nonce_str", ""),
            "sign": data.get("sign", ""),
            "raw": dict(data),
        }


@dataclass
class ModernResponse:
    """Status fields common to every JSON response."""

    code: str = ""
    message: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def envelope(self) -> ModernEnvelope:
        return ModernEnvelope(code=self.code, message=self.message)

    def verdict(self) -> Verdict:
        return classify(self.envelope)

    def success(self) -> bool:
        return self.verdict().success

    @staticmethod
    def status_kwargs(data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "code": str(data.get("code") or ""),
            "message": str(data.get("message") or ""),
            "raw": dict(data),
        }
