"""
WeChat Pay merchant gateway client.

Legacy endpoints exchange signed XML documents (MD5 / HMAC-SHA256 over the
sorted fields plus the merchant key). Modern endpoints exchange JSON with an
RSA-SHA256 ``Authorization`` header. A client is bound to one signing mode
at construction; calling an endpoint of the other generation raises
:class:`MissingCredential`.
"""
from __future__ import annotations

import json
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from wxpay_lite.codec import from_xml, to_xml
from wxpay_lite.config import DEFAULT_GATEWAY_URL, Settings
from wxpay_lite.core.authorization import NONCE_LENGTH, AuthorizationBuilder, NonceSource, random_nonce
from wxpay_lite.core.classifier import LegacyEnvelope, ModernEnvelope, classify
from wxpay_lite.core.digest import sign_fields, verify_signature
from wxpay_lite.core.fields import SIGN_FIELD, FieldSpec, extract_wire, validate_field_set
from wxpay_lite.credentials import LegacySigning, ModernSigning, SigningMode
from wxpay_lite.exceptions import InvalidSignature, MissingCredential, TransportError
from wxpay_lite.models import (
    BatchTransferRequest,
    BatchTransferResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    JSAPIPayParams,
    LegacyRequest,
    QueryBatchTransferRequest,
    QueryBatchTransferResponse,
    QueryOrderRequest,
    QueryOrderResponse,
    QueryRefundOrderRequest,
    QueryRefundOrderResponse,
    RefundOrderRequest,
    RefundOrderResponse,
    TransferQueryRequest,
    TransferQueryResponse,
    TransferRequest,
    TransferResponse,
)
from wxpay_lite.models.jsapi import JSAPI_SIGN_TYPE
from wxpay_lite.models.orders import (
    CREATE_ORDER_PATH,
    QUERY_ORDER_PATH,
    QUERY_REFUND_PATH,
    REFUND_ORDER_PATH,
)
from wxpay_lite.models.transfers import (
    BATCH_TRANSFER_PATH,
    QUERY_TRANSFER_PATH,
    TRANSFER_PATH,
)
from wxpay_lite.services.base import DEFAULT_TIMEOUT, BaseService

APPLICATION_JSON = "application/json"

R = TypeVar("R")


class WxPayClient(BaseService):
    """Merchant gateway client bound to one signing mode."""

    def __init__(
        self,
        mch_id: str,
        mode: SigningMode,
        *,
        base_url: str = DEFAULT_GATEWAY_URL,
        client: httpx.AsyncClient | None = None,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
        nonce_source: NonceSource = random_nonce,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(base_url, client=client, timeout=timeout)
        self.mch_id = mch_id
        self.mode = mode
        self.nonce_source = nonce_source
        self.clock = clock
        self._authorization: Optional[AuthorizationBuilder] = None
        if isinstance(mode, ModernSigning):
            self._authorization = AuthorizationBuilder(
                mch_id, mode.certificate, nonce_source=nonce_source, clock=clock
            )

    @classmethod
    def from_settings(cls, settings: Settings, modern: bool = False, **kwargs: Any) -> "WxPayClient":
        """Build a client from environment settings.

        Args:
            settings: Loaded settings.
            modern: Sign with the certificate (JSON endpoints) instead of
                the shared secret (XML endpoints).
        """
        credential = settings.load_credential()
        mode: SigningMode = credential.modern() if modern else credential.legacy()
        client = cls(
            credential.merchant_id,
            mode,
            base_url=settings.base_url,
            client=settings.build_http_client(),
            **kwargs,
        )
        client._owns_client = True
        return client

    # ==================== Signing ====================

    def _secret(self) -> str:
        if not isinstance(self.mode, LegacySigning):
            raise MissingCredential("shared secret")
        return self.mode.secret

    def _authorizer(self) -> AuthorizationBuilder:
        if self._authorization is None:
            raise MissingCredential("certificate")
        return self._authorization

    def sign_request(self, request: LegacyRequest) -> List[FieldSpec]:
        """Return the request's wire fields with a fresh nonce and ``sign`` appended."""
        secret = self._secret()
        fields = request.wire_fields(self.mch_id, self.nonce_source(NONCE_LENGTH))
        validate_field_set(fields)
        signature = sign_fields(fields, secret)
        return fields + [FieldSpec(SIGN_FIELD, signature)]

    def jsapi_pay_params(self, app_id: str, prepay_id: str) -> JSAPIPayParams:
        """Sign the parameter block for the JSAPI ``chooseWXPay`` call."""
        secret = self._secret()
        time_stamp = str(int(self.clock()))
        nonce_str = self.nonce_source(NONCE_LENGTH)
        fields = JSAPIPayParams.signed_fields(app_id, time_stamp, nonce_str, prepay_id)
        pay_sign = sign_fields(fields, secret)
        return JSAPIPayParams(
            app_id=app_id,
            time_stamp=time_stamp,
            nonce_str=nonce_str,
            package=f"prepay_id={prepay_id}",
            sign_type=JSAPI_SIGN_TYPE,
            pay_sign=pay_sign,
        )

    # ==================== Transport ====================

    async def _post_xml(
        self,
        path: str,
        request: LegacyRequest,
        parse: Callable[[Dict[str, str]], R],
    ) -> R:
        """Sign, send and classify one legacy exchange."""
        body = to_xml(extract_wire(self.sign_request(request)))
        response = await self._request(
            "POST",
            path,
            content=body,
            headers={"Content-Type": "text/xml; charset=utf-8"},
        )
        data = from_xml(response.content)
        verdict = classify(LegacyEnvelope.from_mapping(data), response.status_code)
        if not verdict.success:
            self.logger.warning("gateway_rejected", path=path, error=str(verdict.error))
            verdict.raise_for_error()
        return parse(data)

    async def _call_json(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]],
        parse: Callable[[Dict[str, Any]], R],
    ) -> R:
        """Sign, send and classify one modern exchange.

        The signed body is exactly the body sent; GET requests sign an
        empty body.
        """
        authorizer = self._authorizer()
        body = ""
        if payload is not None:
            body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)

        headers = {
            "Accept": APPLICATION_JSON,
            "Authorization": authorizer.build(method, path, body),
        }
        if payload is not None:
            headers["Content-Type"] = APPLICATION_JSON

        response = await self._request(
            method,
            path,
            content=body.encode("utf-8") if body else None,
            headers=headers,
        )

        data: Dict[str, Any] = {}
        if response.content:
            try:
                data = json.loads(response.content)
            except json.JSONDecodeError as e:
                raise TransportError(
                    message=f"Invalid JSON response: {response.text[:200]}",
                    url=self.url_for(path),
                    original_error=e,
                ) from e
            if not isinstance(data, dict):
                raise TransportError(
                    message=f"Unexpected JSON response: {response.text[:200]}",
                    url=self.url_for(path),
                )

        verdict = classify(ModernEnvelope.from_mapping(data), response.status_code)
        if not verdict.success:
            self.logger.warning("gateway_rejected", path=path, error=str(verdict.error))
            verdict.raise_for_error()
        return parse(data)

    # ==================== Orders ====================

    async def create_order(self, request: CreateOrderRequest) -> CreateOrderResponse:
        """Place a unified order and get ``prepay_id`` / ``code_url``."""
        return await self._post_xml(CREATE_ORDER_PATH, request, CreateOrderResponse.from_fields)

    async def query_order(self, request: QueryOrderRequest) -> QueryOrderResponse:
        """Look up an order. Check ``.paid`` for settlement."""
        return await self._post_xml(QUERY_ORDER_PATH, request, QueryOrderResponse.from_fields)

    async def refund_order(self, request: RefundOrderRequest) -> RefundOrderResponse:
        """Request a refund. The HTTP client must carry the merchant client certificate."""
        return await self._post_xml(REFUND_ORDER_PATH, request, RefundOrderResponse.from_fields)

    async def query_refund_order(self, request: QueryRefundOrderRequest) -> QueryRefundOrderResponse:
        """Look up a refund. Check ``.refunded`` for settlement."""
        return await self._post_xml(QUERY_REFUND_PATH, request, QueryRefundOrderResponse.from_fields)

    # ==================== Transfers ====================

    async def transfer(self, request: TransferRequest) -> TransferResponse:
        """Pay into a user's balance. Needs the merchant client certificate."""
        return await self._post_xml(TRANSFER_PATH, request, TransferResponse.from_fields)

    async def query_transfer(self, request: TransferQueryRequest) -> TransferQueryResponse:
        return await self._post_xml(QUERY_TRANSFER_PATH, request, TransferQueryResponse.from_fields)

    async def batch_transfer(self, request: BatchTransferRequest) -> BatchTransferResponse:
        """Start a batch transfer on the modern protocol."""
        return await self._call_json(
            "POST", BATCH_TRANSFER_PATH, request.to_json(), BatchTransferResponse.from_json
        )

    async def query_batch_transfer(
        self, request: QueryBatchTransferRequest
    ) -> QueryBatchTransferResponse:
        return await self._call_json(
            "GET", request.path(), None, QueryBatchTransferResponse.from_json
        )

    # ==================== Notifications ====================

    def parse_notification(self, body: bytes | str) -> Dict[str, str]:
        """Parse and verify a legacy payment/refund notification.

        Raises:
            InvalidSignature: If ``sign`` is missing or does not match.
        """
        data = from_xml(body)
        if not verify_signature(data, self._secret()):
            self.logger.warning(
                "notification_signature_invalid",
                out_trade_no=data.get("out_trade_no"),
            )
            raise InvalidSignature("Notification signature verification failed")
        return data

    @staticmethod
    def notification_reply(success: bool = True, message: str = "OK") -> bytes:
        """XML acknowledgement the gateway expects in reply to a notification."""
        return to_xml([
            ("return_code", "SUCCESS" if success else "FAIL"),
            ("return_msg", message),
        ])
