"""Exceptions raised while operating on a Bankwest Online Banking session."""

from typing import Any


class BankwestError(Exception):
    """Base class for every failure raised by bankwestpy."""


class SessionExpired(BankwestError):
    """The server answered with its login page instead of the requested one.

    The session cookies are no longer valid; log in again and build a new
    Session.
    """


class ExportFailed(BankwestError):
    """The transaction search form was presented again instead of an export."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class ExportParametersRejected(ExportFailed):
    """The server rejected the account or date range supplied."""


class ExportFailedUnknownReason(ExportFailed):
    """The form came back without any explanation of what went wrong."""


class UnrecognisedResponse(BankwestError):
    """None of the accepted page shapes matched the response."""

    def __init__(
        self,
        message: str,
        shapes: list[Any] | None = None,
        url: str | None = None,
        status_code: int | None = None,
        reasons: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.shapes = list(shapes or [])
        self.url = url
        self.status_code = status_code
        self.reasons = dict(reasons or {})


class ParseError(UnrecognisedResponse):
    """A page was recognised but its contents could not be parsed."""


def export_failure(errors: list[str]) -> ExportFailed:
    """Build the export failure matching a re-presented search form."""
    if errors:
        return ExportParametersRejected(
            "Transaction export rejected: " + "; ".join(errors), errors
        )
    return ExportFailedUnknownReason("Transaction export failed for an unknown reason")
