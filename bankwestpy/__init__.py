"""Bankwest Online Banking - Session protocol client."""

from bankwestpy.client import create_client_from_cookies, load_cookies
from bankwestpy.errors import (
    BankwestError,
    ExportFailed,
    ExportFailedUnknownReason,
    ExportParametersRejected,
    ParseError,
    SessionExpired,
    UnrecognisedResponse,
)
from bankwestpy.forms import extract_form_tokens, find_form
from bankwestpy.models import Account, Transaction
from bankwestpy.parsers import Classification, PageClassifier, Shape
from bankwestpy.session import Session, resource_uris

__all__ = [
    "Session",
    "resource_uris",
    "create_client_from_cookies",
    "load_cookies",
    "extract_form_tokens",
    "find_form",
    "PageClassifier",
    "Classification",
    "Shape",
    "Account",
    "Transaction",
    "BankwestError",
    "SessionExpired",
    "ExportFailed",
    "ExportParametersRejected",
    "ExportFailedUnknownReason",
    "UnrecognisedResponse",
    "ParseError",
]
