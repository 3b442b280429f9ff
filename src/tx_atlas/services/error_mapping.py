from dataclasses import dataclass
from enum import Enum

from tx_atlas.errors import DEFAULT_MESSAGES, FailureKind, UnknownCoinError, UpstreamError


class ResponseClass(str, Enum):
    CLIENT_ERROR = "client_error"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INTERNAL_ERROR = "internal_error"


STATUS_CODES: dict[ResponseClass, int] = {
    ResponseClass.CLIENT_ERROR: 400,
    ResponseClass.NOT_FOUND: 404,
    ResponseClass.SERVICE_UNAVAILABLE: 503,
    ResponseClass.INTERNAL_ERROR: 500,
}

FAILURE_CLASSES: dict[FailureKind, ResponseClass] = {
    FailureKind.INVALID_ADDRESS: ResponseClass.CLIENT_ERROR,
    FailureKind.INVALID_KEY: ResponseClass.CLIENT_ERROR,
    FailureKind.NOT_FOUND: ResponseClass.NOT_FOUND,
    FailureKind.SOURCE_UNAVAILABLE: ResponseClass.SERVICE_UNAVAILABLE,
    FailureKind.INTERNAL: ResponseClass.INTERNAL_ERROR,
}


def _check_exhaustive() -> None:
    missing = set(FailureKind) - set(FAILURE_CLASSES)
    if missing:
        names = ", ".join(sorted(kind.value for kind in missing))
        raise RuntimeError(f"FailureKind values without a response class: {names}")
    unmapped = set(ResponseClass) - set(STATUS_CODES)
    if unmapped:
        names = ", ".join(sorted(cls.value for cls in unmapped))
        raise RuntimeError(f"Response classes without a status code: {names}")


_check_exhaustive()


@dataclass(frozen=True)
class MappedFailure:
    classification: ResponseClass
    message: str
    kind: FailureKind | None = None # None when the failure was not classified upstream

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.classification]

    @property
    def retryable(self) -> bool:
        return self.classification is ResponseClass.SERVICE_UNAVAILABLE


def map_failure(error: BaseException | FailureKind) -> MappedFailure:
    """
    Translate a failure into a response classification.

    Known FailureKinds go through the FAILURE_CLASSES table. Anything else is
    an internal error that keeps the underlying message for diagnostics.
    """
    if isinstance(error, FailureKind):
        return MappedFailure(FAILURE_CLASSES[error], DEFAULT_MESSAGES[error], error)

    if isinstance(error, UpstreamError):
        return MappedFailure(FAILURE_CLASSES[error.kind], error.message, error.kind)

    if isinstance(error, UnknownCoinError):
        return MappedFailure(ResponseClass.NOT_FOUND, str(error))

    message = str(error) or error.__class__.__name__
    return MappedFailure(ResponseClass.INTERNAL_ERROR, message)
