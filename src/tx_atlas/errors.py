from enum import Enum


class FailureKind(str, Enum):
    INVALID_ADDRESS = "invalid_address"
    INVALID_KEY = "invalid_key"
    NOT_FOUND = "not_found"
    SOURCE_UNAVAILABLE = "source_unavailable"
    INTERNAL = "internal"


DEFAULT_MESSAGES: dict[FailureKind, str] = {
    FailureKind.INVALID_ADDRESS: "invalid address",
    FailureKind.INVALID_KEY: "invalid key",
    FailureKind.NOT_FOUND: "not found",
    FailureKind.SOURCE_UNAVAILABLE: "source is unavailable",
    FailureKind.INTERNAL: "internal error",
}


class TxAtlasError(Exception):
    """Base class for all errors raised by tx-atlas."""


class UpstreamError(TxAtlasError):
    kind: FailureKind = FailureKind.INTERNAL

    def __init__(self, message: str | None = None) -> None:
        self.message = message or DEFAULT_MESSAGES[self.kind]
        super().__init__(self.message)


class InvalidAddressError(UpstreamError):
    kind = FailureKind.INVALID_ADDRESS


class InvalidKeyError(UpstreamError):
    kind = FailureKind.INVALID_KEY


class NotFoundError(UpstreamError):
    kind = FailureKind.NOT_FOUND


class SourceUnavailableError(UpstreamError):
    kind = FailureKind.SOURCE_UNAVAILABLE


class InternalError(UpstreamError):
    kind = FailureKind.INTERNAL


class NoCapabilityError(InternalError):
    """The chain integration does not implement the capability a query needs."""

    def __init__(self, coin: str, capability: str) -> None:
        self.coin = coin
        self.capability = capability
        super().__init__(f"no capability for this coin: {coin} does not support {capability}")


class UnknownCoinError(TxAtlasError):
    def __init__(self, coin: str) -> None:
        self.coin = coin
        super().__init__(f"unknown coin: {coin}")
