"""Error taxonomy surfaced by the Fetching and Parsing stages.

Only failures to obtain usable page content reach the caller. Extractor and
capture failures are recovered where they happen and never appear here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    NETWORK_UNREACHABLE = "network_unreachable"
    ALL_RELAYS_EXHAUSTED = "all_relays_exhausted"
    PARSE_FAILURE = "parse_failure"
    UPSTREAM_DENIED = "upstream_denied"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    UPSTREAM_SERVER_ERROR = "upstream_server_error"
    UNKNOWN = "unknown"


class FailureCause(str, Enum):
    """Why a single relay attempt was rejected."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    DENIED = "denied"
    SERVER_ERROR = "server_error"
    STATUS = "status"
    ENVELOPE = "envelope"
    IMPLAUSIBLE = "implausible"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class RelayFailure:
    relay: str
    cause: FailureCause
    detail: str
    status: int | None = None

    def __str__(self) -> str:
        return f"{self.relay}: {self.detail}"


class RelayError(Exception):
    """Raised for a single failed relay attempt. Never escapes the fetcher."""

    def __init__(self, relay: str, cause: FailureCause, detail: str, status: int | None = None) -> None:
        super().__init__(f"{relay}: {detail}")
        self.failure = RelayFailure(relay=relay, cause=cause, detail=detail, status=status)


DEFAULT_SUGGESTIONS: tuple[str, ...] = (
    "Check that the URL is spelled correctly and publicly reachable",
    "The site may block automated access or external proxies",
    "Try again in a few minutes",
)


class AnalysisError(Exception):
    """Base class for every error ``analyze`` can raise."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    user_message: str = (
        "An unexpected error occurred during website analysis. Please try again."
    )

    def __init__(self, detail: str, failures: list[RelayFailure] | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.failures: list[RelayFailure] = list(failures or [])

    @property
    def suggestions(self) -> list[str]:
        return list(DEFAULT_SUGGESTIONS)

    @property
    def reasons(self) -> list[str]:
        return [str(f) for f in self.failures]


class AllRelaysExhausted(AnalysisError):
    kind = ErrorKind.ALL_RELAYS_EXHAUSTED
    user_message = "External services temporarily unavailable, please retry in a few minutes."


class NetworkUnreachable(AllRelaysExhausted):
    kind = ErrorKind.NETWORK_UNREACHABLE
    user_message = (
        "Network connection failed. Please check your internet connection and try again."
    )


class UpstreamDenied(AllRelaysExhausted):
    kind = ErrorKind.UPSTREAM_DENIED
    user_message = "Access denied. The website is blocking external requests."


class UpstreamTimeout(AllRelaysExhausted):
    kind = ErrorKind.UPSTREAM_TIMEOUT
    user_message = (
        "Request timed out. The website may be slow to respond or temporarily "
        "unavailable, please retry later."
    )


class UpstreamServerError(AllRelaysExhausted):
    kind = ErrorKind.UPSTREAM_SERVER_ERROR
    user_message = "The upstream server is experiencing issues. Please try again later."


class ParseFailure(AnalysisError):
    kind = ErrorKind.PARSE_FAILURE
    user_message = (
        "Failed to parse website content. The website may be using advanced "
        "protection or the content format is not supported."
    )


class UnknownAnalysisError(AnalysisError):
    """Fallback bucket. ``detail`` holds the original message verbatim."""

    kind = ErrorKind.UNKNOWN


_SINGLE_CAUSE_ERRORS: dict[FailureCause, type[AllRelaysExhausted]] = {
    FailureCause.NETWORK: NetworkUnreachable,
    FailureCause.TIMEOUT: UpstreamTimeout,
    FailureCause.DENIED: UpstreamDenied,
    FailureCause.SERVER_ERROR: UpstreamServerError,
}


def classify_relay_failures(failures: list[RelayFailure]) -> AllRelaysExhausted:
    """Build the exhaustion error for a chain where every relay failed.

    A shared single cause maps to its specific variant; mixed causes stay
    ``AllRelaysExhausted``. Every variant is a subclass of it.
    """
    lines = "\n".join(str(f) for f in failures)
    detail = f"All relay services failed:\n{lines}" if failures else "No relay services available"
    causes = {f.cause for f in failures}
    error_cls: type[AllRelaysExhausted] = AllRelaysExhausted
    if len(causes) == 1:
        error_cls = _SINGLE_CAUSE_ERRORS.get(next(iter(causes)), AllRelaysExhausted)
    return error_cls(detail, failures)
