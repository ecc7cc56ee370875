"""Request and response models for gateway endpoints."""

from wxpay_lite.models.base import LegacyRequest, LegacyResponse, ModernResponse
from wxpay_lite.models.jsapi import JSAPIPayParams
from wxpay_lite.models.orders import (
    CreateOrderRequest,
    CreateOrderResponse,
    QueryOrderRequest,
    QueryOrderResponse,
    QueryRefundOrderRequest,
    QueryRefundOrderResponse,
    RefundOrderRequest,
    RefundOrderResponse,
)
from wxpay_lite.models.transfers import (
    BatchTransferRequest,
    BatchTransferResponse,
    QueryBatchTransferRequest,
    QueryBatchTransferResponse,
    TransferDetail,
    TransferQueryRequest,
    TransferQueryResponse,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "BatchTransferRequest",
    "BatchTransferResponse",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "JSAPIPayParams",
    "LegacyRequest",
    "LegacyResponse",
    "ModernResponse",
    "QueryBatchTransferRequest",
    "QueryBatchTransferResponse",
    "QueryOrderRequest",
    "QueryOrderResponse",
    "QueryRefundOrderRequest",
    "QueryRefundOrderResponse",
    "RefundOrderRequest",
    "RefundOrderResponse",
    "TransferDetail",
    "TransferQueryRequest",
    "TransferQueryResponse",
    "TransferRequest",
    "TransferResponse",
]
