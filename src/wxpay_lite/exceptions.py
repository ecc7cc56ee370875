"""Exception hierarchy for the WeChat Pay gateway client."""

from __future__ import annotations


class WxPayError(Exception):
    """Base exception for all gateway client errors.

    All library-specific exceptions inherit from this class.
    """

    def __init__(self, message: str = "WeChat Pay gateway error") -> None:
        self.message = message
        super().__init__(self.message)


class MissingCredential(WxPayError):
    """Raised when an operation needs a credential the client was not built with.

    Signing with RSA-SHA256 without a loaded certificate, or calling a legacy
    endpoint without a shared secret.
    """

    def __init__(self, credential: str = "certificate") -> None:
        self.credential = credential
        super().__init__(f"Missing credential: {credential} is required for this operation")


class InvalidCredential(WxPayError):
    """Raised at load time when a certificate or private key cannot be used."""


class MalformedTimestamp(WxPayError):
    """Raised when a wire timestamp does not match the expected pattern exactly."""

    def __init__(self, value: str, pattern: str) -> None:
        self.value = value
        self.pattern = pattern
        super().__init__(f"Malformed timestamp {value!r}, expected {pattern}")


class GatewayBusinessError(WxPayError):
    """Failure reported by the gateway with a machine-readable code.

    ``code`` and ``description`` are passed through exactly as received.
    """

    def __init__(self, code: str, description: str = "") -> None:
        self.code = code
        self.description = description
        super().__init__(f"{code}: {description}")


class UnknownGatewayError(WxPayError):
    """Failure without a machine-readable business code.

    Optionally annotated with the transport-level status line
    (``return_code``/``return_msg``) and a non-200 HTTP status.
    """

    def __init__(
        self,
        return_code: str = "",
        return_msg: str = "",
        status_code: int | None = None,
    ) -> None:
        self.return_code = return_code
        self.return_msg = return_msg
        self.status_code = status_code
        if return_code and return_msg:
            message = f"{return_code} ({return_msg})"
        else:
            message = "UNKNOWN"
        if status_code is not None:
            message = f"{message}: unexpected HTTP status {status_code}"
        super().__init__(message)


class InvalidSignature(WxPayError):
    """Raised when a signed message received from the gateway fails verification."""


class TransportError(WxPayError):
    """Raised when the HTTP exchange itself fails.

    Wraps timeouts, connection errors and undecodable response bodies.
    """

    def __init__(
        self,
        message: str = "Transport error",
        url: str = "",
        original_error: Exception | None = None,
    ) -> None:
        self.url = url
        self.original_error = original_error
        super().__init__(f"[{url}] {message}" if url else message)
