"""Transfers to users' balances.

Single transfers use the legacy XML protocol; batch transfers use the
modern JSON protocol with RSA-signed ``Authorization`` headers. Amounts are
integers in fen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from wxpay_lite.core.classifier import SUCCESS
from wxpay_lite.core.fields import FieldSpec
from wxpay_lite.core.timestamp import decode_rfc3339, decode_utc8
from wxpay_lite.models.base import LegacyResponse, ModernResponse, as_int, as_time

TRANSFER_PATH = "/mmpaymkttransfers/promotion/transfers"
QUERY_TRANSFER_PATH = "/mmpaymkttransfers/gettransferinfo"
BATCH_TRANSFER_PATH = "/v3/transfer/batches"
QUERY_BATCH_TRANSFER_PATH = "/v3/transfer/batches/out-batch-no/{out_batch_no}"

NO_CHECK = "NO_CHECK"
FORCE_CHECK = "FORCE_CHECK"
MAX_BATCH_DETAILS = 1000


# ==================== Transfer (legacy) ====================

@dataclass
class TransferRequest:
    """Pay ``amount`` fen into a user's balance."""

    app_id: str
    open_id: str
    partner_trade_no: str
    amount: int  # at least 100 (1.00 CNY)
    desc: str
    device_info: str = ""
    check_name: str = ""  # NO_CHECK (default) or FORCE_CHECK
    re_user_name: str = ""  # required with FORCE_CHECK
    spbill_create_ip: str = ""

    def __post_init__(self) -> None:
        if not self.check_name:
            self.check_name = NO_CHECK
        if self.check_name == FORCE_CHECK and not self.re_user_name:
            raise ValueError("re_user_name is required with FORCE_CHECK")

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]:
        return [
            FieldSpec("mch_appid", self.app_id),
            FieldSpec("mchid", mch_id),
            FieldSpec("device_info", self.device_info, omit_if_empty=True),
            FieldSpec("nonce_str", nonce_str),
            FieldSpec("partner_trade_no", self.partner_trade_no),
            FieldSpec("openid", self.open_id),
            FieldSpec("check_name", self.check_name),
            FieldSpec("re_user_name", self.re_user_name, omit_if_empty=True),
            FieldSpec("amount", self.amount),
            FieldSpec("desc", self.desc),
            FieldSpec("spbill_create_ip", self.spbill_create_ip, omit_if_empty=True),
        ]


@dataclass
class TransferResponse(LegacyResponse):
    app_id: str = ""
    mch_id: str = ""
    device_info: str = ""
    partner_trade_no: str = ""
    payment_no: str = ""
    payment_time: Optional[datetime] = None

    @classmethod
    def from_fields(cls, data: Dict[str, str]) -> "TransferResponse":
        return cls(
            **cls.status_kwargs(data),
            app_id=data.get("mch_appid", ""),
            mch_id=data.get("mchid", ""),
            device_info=data.get("device_info", ""),
            partner_trade_no=data.get("partner_trade_no", ""),
            payment_no=data.get("payment_no", ""),
            payment_time=as_time(data, "payment_time", decode_utc8),
        )


@dataclass
class TransferQueryRequest:
    app_id: str
    partner_trade_no: str

    def wire_fields(self, mch_id: str, nonce_str: str) -> List[FieldSpec]:
        return [
            FieldSpec("nonce_str", nonce_str),
            FieldSpec("partner_trade_no", self.partner_trade_no),
            FieldSpec("mch_id", mch_id),
            FieldSpec("appid", self.app_id),
        ]


@dataclass
class TransferQueryResponse(LegacyResponse):
    app_id: str = ""
    mch_id: str = ""
    partner_trade_no: str = ""
    detail_id: str = ""
    status: str = ""  # SUCCESS, FAILED, PROCESSING
    reason: str = ""
    open_id: str = ""
    transfer_name: str = ""
    payment_amount: int = 0
    transfer_time: Optional[datetime] = None
    payment_time: Optional[datetime] = None
    desc: str = ""

    @classmethod
    def from_fields(cls, data: Dict[str, str]) -> "TransferQueryResponse":
        return cls(
            **cls.status_kwargs(data),
            app_id=data.get("appid", ""),
            mch_id=data.get("mch_id", ""),
            partner_trade_no=data.get("partner_trade_no", ""),
            detail_id=data.get("detail_id", ""),
            status=data.get("status", ""),
            reason=data.get("reason", ""),
            open_id=data.get("openid", ""),
            transfer_name=data.get("transfer_name", ""),
            payment_amount=as_int(data, "payment_amount"),
            transfer_time=as_time(data, "transfer_time", decode_utc8),
            payment_time=as_time(data, "payment_time", decode_utc8),
            desc=data.get("desc", ""),
        )

    @property
    def transferred(self) -> bool:
        """True only when the call succeeded and the money has arrived."""
        return self.success() and self.status == SUCCESS


# ==================== Batch transfer (modern) ====================

@dataclass
class TransferDetail:
    """One line of a batch transfer.

    ``user_name`` must already be encrypted with the platform certificate
    when supplied; it is sent as-is.
    """

    out_detail_no: str
    transfer_amount: int
    transfer_remark: str
    open_id: str
    user_name: str = ""

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "out_detail_no": self.out_detail_no,
            "transfer_amount": self.transfer_amount,
            "transfer_remark": self.transfer_remark,
            "openid": self.open_id,
        }
        if self.user_name:
            data["user_name"] = self.user_name
        return data


@dataclass
class BatchTransferRequest:
    """Batch transfer. ``total_amount``/``total_num`` are derived from the details."""

    app_id: str
    out_batch_no: str
    batch_name: str
    batch_remark: str
    transfer_detail_list: List[TransferDetail] = field(default_factory=list)
    transfer_scene_id: str = ""
    notify_url: str = ""

    def __post_init__(self) -> None:
        if not self.transfer_detail_list:
            raise ValueError("transfer_detail_list must not be empty")
        if len(self.transfer_detail_list) > MAX_BATCH_DETAILS:
            raise ValueError(f"At most {MAX_BATCH_DETAILS} details per batch")

    @property
    def total_amount(self) -> int:
        return sum(d.transfer_amount for d in self.transfer_detail_list)

    @property
    def total_num(self) -> int:
        return len(self.transfer_detail_list)

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "appid": self.app_id,
            "out_batch_no": self.out_batch_no,
            "batch_name": self.batch_name,
            "batch_remark": self.batch_remark,
            "total_amount": self.total_amount,
            "total_num": self.total_num,
            "transfer_detail_list": [d.to_json() for d in self.transfer_detail_list],
        }
        if self.transfer_scene_id:
            data["transfer_scene_id"] = self.transfer_scene_id
        if self.notify_url:
            data["notify_url"] = self.notify_url
        return data


@dataclass
class BatchTransferResponse(ModernResponse):
    out_batch_no: str = ""
    batch_id: str = ""
    create_time: Optional[datetime] = None
    batch_status: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "BatchTransferResponse":
        return cls(
            **cls.status_kwargs(data),
            out_batch_no=data.get("out_batch_no", ""),
            batch_id=data.get("batch_id", ""),
            create_time=as_time(data, "create_time", decode_rfc3339),
            batch_status=data.get("batch_status", ""),
        )


@dataclass
class QueryBatchTransferRequest:
    out_batch_no: str

    def path(self) -> str:
        no = quote(self.out_batch_no, safe="")
        return QUERY_BATCH_TRANSFER_PATH.format(out_batch_no=no) + "?need_query_detail=false"


@dataclass
class QueryBatchTransferResponse(ModernResponse):
    """Batch summary from ``transfer_batch``; per-detail records are not fetched."""

    mch_id: str = ""
    out_batch_no: str = ""
    batch_id: str = ""
    app_id: str = ""
    batch_status: str = ""  # WAIT_PAY, ACCEPTED, PROCESSING, FINISHED, CLOSED
    batch_type: str = ""
    batch_name: str = ""
    batch_remark: str = ""
    close_reason: str = ""
    total_amount: int = 0
    total_num: int = 0
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    success_amount: int = 0
    success_num: int = 0
    fail_amount: int = 0
    fail_num: int = 0

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "QueryBatchTransferResponse":
        batch = data.get("transfer_batch") or {}
        return cls(
            **cls.status_kwargs(data),
            mch_id=batch.get("mchid", ""),
            out_batch_no=batch.get("out_batch_no", ""),
            batch_id=batch.get("batch_id", ""),
            app_id=batch.get("appid", ""),
            batch_status=batch.get("batch_status", ""),
            batch_type=batch.get("batch_type", ""),
            batch_name=batch.get("batch_name", ""),
            batch_remark=batch.get("batch_remark", ""),
            close_reason=batch.get("close_reason", ""),
            total_amount=as_int(batch, "total_amount"),
            total_num=as_int(batch, "total_num"),
            create_time=as_time(batch, "create_time", decode_rfc3339),
            update_time=as_time(batch, "update_time", decode_rfc3339),
            success_amount=as_int(batch, "success_amount"),
            success_num=as_int(batch, "success_num"),
            fail_amount=as_int(batch, "fail_amount"),
            fail_num=as_int(batch, "fail_num"),
        )

    @property
    def finished(self) -> bool:
        """True only when the call succeeded and the batch has completed."""
        return self.success() and self.batch_status == "FINISHED"
