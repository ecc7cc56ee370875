"""Parameters handed to the in-app JSAPI ``chooseWXPay`` call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from wxpay_lite.core.fields import FieldSpec

JSAPI_SIGN_TYPE = "MD5"


@dataclass(frozen=True)
class JSAPIPayParams:
    app_id: str
    time_stamp: str
    nonce_str: str
    package: str
    sign_type: str
    pay_sign: str

    @staticmethod
    def signed_fields(app_id: str, time_stamp: str, nonce_str: str, prepay_id: str) -> List[FieldSpec]:
        """Fields covered by ``paySign``. Wire names are camelCase here."""
        return [
            FieldSpec("appId", app_id),
            FieldSpec("timeStamp", time_stamp),
            FieldSpec("nonceStr", nonce_str),
            FieldSpec("package", f"prepay_id={prepay_id}"),
            FieldSpec("signType", JSAPI_SIGN_TYPE),
        ]

    def to_dict(self) -> Dict[str, str]:
        return {
            "appId": self.app_id,
            "timeStamp": self.time_stamp,
            "nonceStr": self.nonce_str,
            "package": self.package,
            "signType": self.sign_type,
            "paySign": self.pay_sign,
        }
