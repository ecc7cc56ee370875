"""Order endpoints: unified order, order query, refund and refund query.

Amounts are integers in fen (1/100 CNY).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from wxpay_lite.core.classifier import SUCCESS
from wxpay_lite.core.fields import FieldSpec
from wxpay_lite.core.timestamp import decode_compact, decode_utc8
from wxpay_lite.models.base import LegacyResponse, as_int, as_time

CREATE_ORDER_PATH = "/pay/unifiedorder"
QUERY_ORDER_PATH = "/pay/orderquery"
REFUND_ORDER_PATH = "/secapi/pay/refund"
QUERY_REFUND_PATH = "/pay/refundquery"


# ==================== Create order ====================

@dataclass
class CreateOrderRequest:
    """Unified order request.

    ``time_start``/``time_expire`` use the compact UTC+8 form
    ``YYYYMMDDHHMMSS`` (see ``encode_compact``).
    """

    app_id: str
    body: str  # max 127 chars
    out_trade_no: str  # 6-32 chars
    total_fee: int
    spbill_create_ip: str
    notify_url: str
    trade_type: str  # JSAPI, NATIVE, APP
    device_info: str = ""
    sign_type: str = ""  # MD5 (default) or HMAC-SHA256
    detail: str = ""
    attach: str = ""
    fee_type: str = ""  # defaults to CNY on the gateway
    time_start: str = ""
    time_expire: str = ""
    goods_tag: str = ""
    product_id: str = ""  # required for NATIVE
    limit_pay: str = ""  # no_credit disables credit cards
    open_id: str = ""  # required for JSAPI
    receipt: str = ""
    profit_sharing: str = ""
    scene_info: str = ""

    def __post_init__(self) -> None:
        if self.trade_type == "NATIVE" and not self.product_id:
            raise ValueError("product_id is required for NATIVE trade type")
        if self.trade_type == "JSAPI" and not self.open_id:
            raise ValueError("open_id is required for JSAPI trade type")

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]:
        return [
            FieldSpec("appid", self.app_id),
            FieldSpec("mch_id", mch_id),
            FieldSpec("device_info", self.device_info, omit_if_empty=True),
            FieldSpec("nonce_str", nonce_str),
            FieldSpec("sign_type", self.sign_type, omit_if_empty=True),
            FieldSpec("body", self.body),
            FieldSpec("detail", self.detail, omit_if_empty=True),
            FieldSpec("attach", self.attach, omit_if_empty=True),
            FieldSpec("out_trade_no", self.out_trade_no),
            FieldSpec("fee_type", self.fee_type, omit_if_empty=True),
            FieldSpec("total_fee", self.total_fee),
            FieldSpec("spbill_create_ip", self.spbill_create_ip),
            FieldSpec("time_start", self.time_start, omit_if_empty=True),
            FieldSpec("time_expire", self.time_expire, omit_if_empty=True),
            FieldSpec("goods_tag", self.goods_tag, omit_if_empty=True),
            FieldSpec("notify_url", self.notify_url),
            FieldSpec("trade_type", self.trade_type),
            FieldSpec("product_id", self.product_id, omit_if_empty=True),
            FieldSpec("limit_pay", self.limit_pay, omit_if_empty=True),
            FieldSpec("openid", self.open_id, omit_if_empty=True),
            FieldSpec("receipt", self.receipt, omit_if_empty=True),
            FieldSpec("profit_sharing", self.profit_sharing, omit_if_empty=True),
            FieldSpec("scene_info", self.scene_info, omit_if_empty=True),
        ]


@dataclass
class CreateOrderResponse(LegacyResponse):
    app_id: str = ""
    mch_id: str = ""
    device_info: str = ""
    trade_type: str = ""
    prepay_id: str = ""
    code_url: str = ""

    @classmethod
    def from_fields(cls, data: Dict[str, str]) -> "CreateOrderResponse":
        return cls(
            **cls.status_kwargs(data),
            app_id=data.get("appid", ""),
            mch_id=data.get("mch_id", ""),
            device_info=data.get("device_info", ""),
            trade_type=data.get("trade_type", ""),
            prepay_id=data.get("prepay_id", ""),
            code_url=data.get("code_url", ""),
        )


# ==================== Query order ====================

@dataclass
class QueryOrderRequest:
    """Order query by gateway transaction id or merchant trade number."""

    app_id: str
    transaction_id: str = ""
    out_trade_no: str = ""
    sign_type: str = ""

    def __post_init__(self) -> None:
        if not self.transaction_id and not self.out_trade_no:
            raise ValueError("transaction_id or out_trade_no required")

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]:
        return [
            FieldSpec("appid", self.app_id),
            FieldSpec("mch_id", mch_id),
            FieldSpec("transaction_id", self.transaction_id, omit_if_empty=True),
            FieldSpec("out_trade_no", self.out_trade_no, omit_if_empty=True),
            FieldSpec("nonce_str", nonce_str),
            FieldSpec("sign_type", self.sign_type, omit_if_empty=True),
        ]


@dataclass
class QueryOrderResponse(LegacyResponse):
    app_id: str = ""
    mch_id: str = ""
    device_info: str = ""
    open_id: str = ""
    is_subscribe: str = ""
    trade_type: str = ""
    trade_state: str = ""
    bank_type: str = ""
    total_fee: int = 0
    settlement_total_fee: int = 0
    fee_type: str = ""
    cash_fee: int = 0
    cash_fee_type: str = ""
    coupon_fee: int = 0
    coupon_count: int = 0
    transaction_id: str = ""
    out_trade_no: str = ""
    attach: str = ""
    time_end: Optional[datetime] = None
    trade_state_desc: str = ""

    @classmethod
    def from_fields(cls, data: Dict[str, str]) -> "QueryOrderResponse":
        return cls(
            **cls.status_kwargs(data),
            app_id=data.get("appid", ""),
            mch_id=data.get("mch_id", ""),
            device_info=data.get("device_info", ""),
            open_id=data.get("openid", ""),
            is_subscribe=data.get("is_subscribe", ""),
            trade_type=data.get("trade_type", ""),
            trade_state=data.get("trade_state", ""),
            bank_type=data.get("bank_type", ""),
            total_fee=as_int(data, "total_fee"),
            settlement_total_fee=as_int(data, "settlement_total_fee"),
            fee_type=data.get("fee_type", ""),
            cash_fee=as_int(data, "cash_fee"),
            cash_fee_type=data.get("cash_fee_type", ""),
            coupon_fee=as_int(data, "coupon_fee"),
            coupon_count=as_int(data, "coupon_count"),
            transaction_id=data.get("transaction_id", ""),
            out_trade_no=data.get("out_trade_no", ""),
            attach=data.get("attach", ""),
            time_end=as_time(data, "time_end", decode_compact),
            trade_state_desc=data.get("trade_state_desc", ""),
        )

    @property
    def paid(self) -> bool:
        """True only when the call succeeded and the trade itself is settled."""
        return self.success() and self.trade_state == SUCCESS


# ==================== Refund ====================

@dataclass
class RefundOrderRequest:
    """Refund request. The transport must present the merchant client certificate."""

    app_id: str
    out_refund_no: str  # max 64 chars
    total_fee: int
    refund_fee: int
    transaction_id: str = ""
    out_trade_no: str = ""
    sign_type: str = ""
    refund_fee_type: str = ""
    refund_desc: str = ""
    refund_account: str = ""
    notify_url: str = ""

    def __post_init__(self) -> None:
        if not self.transaction_id and not self.out_trade_no:
            raise ValueError("transaction_id or out_trade_no required")

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]:
        return [
            FieldSpec("appid", self.app_id),
            FieldSpec("mch_id", mch_id),
            FieldSpec("nonce_str", nonce_str),
            FieldSpec("sign_type", self.sign_type, omit_if_empty=True),
            FieldSpec("transaction_id", self.transaction_id, omit_if_empty=True),
            FieldSpec("out_trade_no", self.out_trade_no, omit_if_empty=True),
            FieldSpec("out_refund_no", self.out_refund_no),
            FieldSpec("total_fee", self.total_fee),
            FieldSpec("refund_fee", self.refund_fee),
            FieldSpec("refund_fee_type", self.refund_fee_type, omit_if_empty=True),
            FieldSpec("refund_desc", self.refund_desc, omit_if_empty=True),
            FieldSpec("refund_account", self.refund_account, omit_if_empty=True),
            FieldSpec("notify_url", self.notify_url, omit_if_empty=True),
        ]


@dataclass
class RefundOrderResponse(LegacyResponse):
    app_id: str = ""
    mch_id: str = ""
    transaction_id: str = ""
    out_trade_no: str = ""
    out_refund_no: str = ""
    refund_id: str = ""
    refund_fee: int = 0
    settlement_refund_fee: int = 0
    total_fee: int = 0
    settlement_total_fee: int = 0
    fee_type: str = ""
    cash_fee: int = 0
    cash_fee_type: str = ""
    cash_refund_fee: int = 0

    @classmethod
    def from_fields(cls, data: Dict[str, str]) -> "RefundOrderResponse":
        return cls(
            **cls.status_kwargs(data),
            app_id=data.get("appid", ""),
            mch_id=data.get("mch_id", ""),
            transaction_id=data.get("transaction_id", ""),
            out_trade_no=data.get("out_trade_no", ""),
            out_refund_no=data.get("out_refund_no", ""),
            refund_id=data.get("refund_id", ""),
            refund_fee=as_int(data, "refund_fee"),
            settlement_refund_fee=as_int(data, "settlement_refund_fee"),
            total_fee=as_int(data, "total_fee"),
            settlement_total_fee=as_int(data, "settlement_total_fee"),
            fee_type=data.get("fee_type", ""),
            cash_fee=as_int(data, "cash_fee"),
            cash_fee_type=data.get("cash_fee_type", ""),
            cash_refund_fee=as_int(data, "cash_refund_fee"),
        )


# ==================== Refund query ====================

@dataclass
class QueryRefundOrderRequest:
    app_id: str
    transaction_id: str = ""
    out_trade_no: str = ""
    out_refund_no: str = ""
    refund_id: str = ""
    offset: int = 0
    sign_type: str = ""

    def __post_init__(self) -> None:
        if not (self.transaction_id or self.out_trade_no or self.out_refund_no or self.refund_id):
            raise ValueError("transaction_id, out_trade_no, out_refund_no or refund_id required")

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]:
        return [
            FieldSpec("appid", self.app_id),
            FieldSpec("mch_id", mch_id),
            FieldSpec("nonce_str", nonce_str),
            FieldSpec("sign_type", self.sign_type, omit_if_empty=True),
            FieldSpec("transaction_id", self.transaction_id, omit_if_empty=True),
            FieldSpec("out_trade_no", self.out_trade_no, omit_if_empty=True),
            FieldSpec("out_refund_no", self.out_refund_no, omit_if_empty=True),
            FieldSpec("refund_id", self.refund_id, omit_if_empty=True),
            FieldSpec("offset", self.offset, omit_if_empty=True),
        ]


@dataclass
class QueryRefundOrderResponse(LegacyResponse):
    """Refund query result. Only the first refund record (``_0``) is mapped."""

    app_id: str = ""
    mch_id: str = ""
    total_refund_count: int = 0
    transaction_id: str = ""
    out_trade_no: str = ""
    total_fee: int = 0
    settlement_total_fee: int = 0
    fee_type: str = ""
    cash_fee: int = 0
    refund_count: int = 0
    out_refund_no_0: str = ""
    refund_id_0: str = ""
    refund_channel_0: str = ""
    refund_fee_0: int = 0
    refund_fee: int = 0
    coupon_refund_fee: int = 0
    settlement_refund_fee_0: int = 0
    refund_status_0: str = ""
    refund_account_0: str = ""
    refund_recv_accout_0: str = ""
    refund_success_time_0: Optional[datetime] = None
    cash_refund_fee: int = 0

    @classmethod
    def from_fields(cls, data: Dict[str, str]) -> "QueryRefundOrderResponse":
        return cls(
            **cls.status_kwargs(data),
            app_id=data.get("appid", ""),
            mch_id=data.get("mch_id", ""),
            total_refund_count=as_int(data, "total_refund_count"),
            transaction_id=data.get("transaction_id", ""),
            out_trade_no=data.get("out_trade_no", ""),
            total_fee=as_int(data, "total_fee"),
            settlement_total_fee=as_int(data, "settlement_total_fee"),
            fee_type=data.get("fee_type", ""),
            cash_fee=as_int(data, "cash_fee"),
            refund_count=as_int(data, "refund_count"),
            out_refund_no_0=data.get("out_refund_no_0", ""),
            refund_id_0=data.get("refund_id_0", ""),
            refund_channel_0=data.get("refund_channel_0", ""),
            refund_fee_0=as_int(data, "refund_fee_0"),
            refund_fee=as_int(data, "refund_fee"),
            coupon_refund_fee=as_int(data, "coupon_refund_fee"),
            settlement_refund_fee_0=as_int(data, "settlement_refund_fee_0"),
            refund_status_0=data.get("refund_status_0", ""),
            refund_account_0=data.get("refund_account_0", ""),
            # Gateway spelling.
            refund_recv_accout_0=data.get("refund_recv_accout_0", ""),
            refund_success_time_0=as_time(data, "refund_success_time_0", decode_utc8),
            cash_refund_fee=as_int(data, "cash_refund_fee"),
        )

    @property
    def refunded(self) -> bool:
        """True only when the call succeeded and the first refund has settled."""
        return self.success() and self.refund_status_0 == SUCCESS
