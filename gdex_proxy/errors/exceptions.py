"""
Exception definitions for the swap proxy
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """
    Unified error codes for proxy operations

    1xxx - Request validation errors
    2xxx - Aggregator (upstream) errors
    3xxx - Node RPC errors
    4xxx - Transaction augmentation errors
    9xxx - Configuration errors
    """
    # Validation errors (client input, never retried)
    INVALID_BODY = "1000"
    MISSING_FIELD = "1001"
    INVALID_ADDRESS = "1002"
    INVALID_AMOUNT = "1003"
    INVALID_SLIPPAGE = "1004"
    INVALID_CHAIN = "1005"

    # Upstream errors
    UPSTREAM_HTTP_ERROR = "2001"
    UPSTREAM_TIMEOUT = "2002"
    UPSTREAM_CONNECTION_FAILED = "2003"
    UPSTREAM_MALFORMED_RESPONSE = "2004"

    # RPC errors
    RPC_CONNECTION_FAILED = "3001"
    RPC_TIMEOUT = "3002"
    RPC_INVALID_RESPONSE = "3003"
    RPC_ERROR_RESPONSE = "3004"

    # Augmentation errors (recovered locally)
    GAS_ESTIMATE_FAILED = "4001"
    FEE_SUGGESTION_FAILED = "4002"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


# Longest client value quoted back in a validation message
MAX_ECHO_CHARS = 80


def _echo(value: Any) -> str:
    """repr of a client-supplied value, truncated to MAX_ECHO_CHARS"""
    if isinstance(value, str):
        value = value[:MAX_ECHO_CHARS + 1]
    text = repr(value)
    if len(text) > MAX_ECHO_CHARS:
        return text[:MAX_ECHO_CHARS] + "..."
    return text


class GdexError(Exception):
    """
    Base exception for all proxy errors

    Attributes:
        message: Human-readable error message (safe to show to clients)
        code: Error code for programmatic handling
        recoverable: Whether the request can proceed without the failed step
        original_error: The underlying exception if any
        details: Additional error context
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    def to_response(self) -> dict:
        """JSON body returned to the client"""
        return {"message": self.message}


class ValidationError(GdexError):
    """
    Bad or missing client input - always HTTP 400

    Raised before any network call when:
    - A required field is absent
    - A token or taker address is malformed
    - The sell amount is not a base-10 integer string
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.MISSING_FIELD,
        field: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"field": field} if field else None,
        )
        self.field = field

    @classmethod
    def invalid_body(cls) -> "ValidationError":
        return cls("Request body must be a JSON object", ErrorCode.INVALID_BODY)

    @classmethod
    def missing_field(cls, field: str) -> "ValidationError":
        return cls(f"Missing required field: {field}", ErrorCode.MISSING_FIELD, field=field)

    @classmethod
    def invalid_address(cls, field: str, value: Any) -> "ValidationError":
        return cls(
            f"Invalid address for {field}: {_echo(value)}",
            ErrorCode.INVALID_ADDRESS,
            field=field,
        )

    @classmethod
    def invalid_amount(cls, field: str, value: Any) -> "ValidationError":
        return cls(
            f"Invalid {field}: {_echo(value)} (expected a non-negative base-10 integer string in wei)",
            ErrorCode.INVALID_AMOUNT,
            field=field,
        )

    @classmethod
    def invalid_slippage(cls, value: Any) -> "ValidationError":
        return cls(
            f"Invalid slippagePercentage: {_echo(value)} (expected a number, e.g. 0.02 for 2%)",
            ErrorCode.INVALID_SLIPPAGE,
            field="slippagePercentage",
        )

    @classmethod
    def unsupported_chain(cls, value: Any, supported: int) -> "ValidationError":
        return cls(
            f"Unsupported chainId: {_echo(value)}. Supported: {supported}",
            ErrorCode.INVALID_CHAIN,
            field="chainId",
        )


class UpstreamError(GdexError):
    """
    Aggregator call failed

    Carries the upstream HTTP status (when one was received) and the parsed
    upstream body so the client sees the aggregator's own explanation.
    Never retried: a stale quote is unsafe to replay.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        details: Any = None,
        code: ErrorCode = ErrorCode.UPSTREAM_HTTP_ERROR,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=False, original_error=original_error)
        self.status = status
        self.details = details

    @property
    def status_code(self) -> int:
        return self.status or 500

    def to_response(self) -> dict:
        return {"message": self.message, "details": self.details}

    @classmethod
    def from_response(cls, status: int, body: Any) -> "UpstreamError":
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        return cls(
            message or f"0x request failed: {status}",
            status=status,
            details=body,
        )

    @classmethod
    def timeout(cls, timeout_seconds: float) -> "UpstreamError":
        return cls(
            f"0x request timed out after {timeout_seconds}s",
            code=ErrorCode.UPSTREAM_TIMEOUT,
        )

    @classmethod
    def connection_failed(cls, error: Exception) -> "UpstreamError":
        return cls(
            f"0x request failed: {error}",
            code=ErrorCode.UPSTREAM_CONNECTION_FAILED,
            original_error=error,
        )


class MalformedUpstreamResponse(GdexError):
    """
    Firm quote succeeded but lacks the transaction fields

    Indicates the upstream schema changed; fatal for the request.
    """

    status_code = 500

    def __init__(self, message: str, raw: Any = None):
        super().__init__(message, ErrorCode.UPSTREAM_MALFORMED_RESPONSE, recoverable=False)
        self.raw = raw

    def to_response(self) -> dict:
        return {"message": self.message, "raw": self.raw}

    @classmethod
    def missing_tx_fields(cls, raw: Any) -> "MalformedUpstreamResponse":
        return cls("0x quote did not return tx fields", raw=raw)


class RpcError(GdexError):
    """
    Node JSON-RPC errors

    Raised when:
    - Connection to the RPC endpoint fails
    - Request times out
    - The node answers with a JSON-RPC error object
    - The response is not valid JSON-RPC
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
        method: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint, "method": method},
        )
        self.endpoint = endpoint
        self.method = method

    @classmethod
    def connection_failed(cls, endpoint: str, method: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint for {method}: {error}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
            method=method,
        )

    @classmethod
    def timeout(cls, endpoint: str, method: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC {method} timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
            method=method,
        )

    @classmethod
    def error_response(cls, endpoint: str, method: str, error: Any) -> "RpcError":
        if isinstance(error, dict):
            error_msg = error.get("message", str(error))
        else:
            error_msg = str(error)
        rpc_error = cls(
            f"RPC error from {method}: {error_msg}",
            ErrorCode.RPC_ERROR_RESPONSE,
            endpoint=endpoint,
            method=method,
        )
        if isinstance(error, dict):
            rpc_error.details["rpc_error_code"] = error.get("code")
            rpc_error.details["rpc_error_data"] = error.get("data")
        return rpc_error

    @classmethod
    def invalid_response(cls, endpoint: str, method: str, reason: str) -> "RpcError":
        return cls(
            f"Invalid RPC response from {method}: {reason}",
            ErrorCode.RPC_INVALID_RESPONSE,
            endpoint=endpoint,
            method=method,
        )


class AugmentationFailure(GdexError):
    """
    Gas estimate or fee suggestion failed

    Always recovered locally: the transaction is returned without the field.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GAS_ESTIMATE_FAILED,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=True, original_error=original_error)

    @classmethod
    def gas_estimate(cls, error: Exception) -> "AugmentationFailure":
        return cls(f"Gas estimation failed: {error}", ErrorCode.GAS_ESTIMATE_FAILED, original_error=error)

    @classmethod
    def fee_suggestion(cls, error: Exception) -> "AugmentationFailure":
        return cls(f"Fee suggestion failed: {error}", ErrorCode.FEE_SUGGESTION_FAILED, original_error=error)


class ConfigurationError(GdexError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
