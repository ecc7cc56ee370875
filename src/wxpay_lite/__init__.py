"""wxpay-lite: signed requests and classified responses for the WeChat Pay merchant gateway."""

from wxpay_lite.config import Settings
from wxpay_lite.core import (
    FieldSpec,
    SignatureScheme,
    Verdict,
    build_string_to_sign,
    classify,
    decode_utc8,
    encode_utc8,
)
from wxpay_lite.credentials import (
    Credential,
    LegacySigning,
    MerchantCertificate,
    ModernSigning,
    SigningMode,
)
from wxpay_lite.exceptions import (
    GatewayBusinessError,
    InvalidCredential,
    InvalidSignature,
    MalformedTimestamp,
    MissingCredential,
    TransportError,
    UnknownGatewayError,
    WxPayError,
)
from wxpay_lite.logging import configure_logging
from wxpay_lite.models import (
    BatchTransferRequest,
    BatchTransferResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    JSAPIPayParams,
    QueryBatchTransferRequest,
    QueryBatchTransferResponse,
    QueryOrderRequest,
    QueryOrderResponse,
    QueryRefundOrderRequest,
    QueryRefundOrderResponse,
    RefundOrderRequest,
    RefundOrderResponse,
    TransferDetail,
    TransferQueryRequest,
    TransferQueryResponse,
    TransferRequest,
    TransferResponse,
)
from wxpay_lite.services import WxPayClient

__version__ = "0.1.0"

__all__ = [
    "BatchTransferRequest",
    "BatchTransferResponse",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "Credential",
    "FieldSpec",
    "GatewayBusinessError",
    "InvalidCredential",
    "InvalidSignature",
    "JSAPIPayParams",
    "LegacySigning",
    "MalformedTimestamp",
    "MerchantCertificate",
    "MissingCredential",
    "ModernSigning",
    "QueryBatchTransferRequest",
    "QueryBatchTransferResponse",
    "QueryOrderRequest",
    "QueryOrderResponse",
    "QueryRefundOrderRequest",
    "QueryRefundOrderResponse",
    "RefundOrderRequest",
    "RefundOrderResponse",
    "Settings",
    "SignatureScheme",
    "SigningMode",
    "TransferDetail",
    "TransferQueryRequest",
    "TransferQueryResponse",
    "TransferRequest",
    "TransferResponse",
    "TransportError",
    "UnknownGatewayError",
    "Verdict",
    "WxPayClient",
    "WxPayError",
    "build_string_to_sign",
    "classify",
    "configure_logging",
    "decode_utc8",
    "encode_utc8",
]
