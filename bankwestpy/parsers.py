"""Recognise Bankwest Online Banking pages and extract their contents."""

import csv
import io
import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from functools import cached_property
from typing import Any, NamedTuple, Protocol
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from bankwestpy.errors import ParseError, UnrecognisedResponse
from bankwestpy.models import Account, Transaction
from bankwestpy.validation import ACCOUNT_PATTERN, parse_date

logger = logging.getLogger(__name__)

BALANCES_TABLE_ID_SUFFIX = "grdBalances"
FROM_DATE_FIELD = "_ctl0:ContentMain:dpFromDate:txtDate"
ERROR_SELECTORS = (
    ".ErrorMessage",
    ".validation-summary li",
    "[id*='ValidationSummary']",
    "[id*='lblError']",
)


class Shape(Enum):
    """The kinds of page the server is known to answer with."""

    ACCOUNTS = "Accounts"
    LOGIN = "Login"
    LOGOUT = "Logout"
    TRANSACTION_SEARCH = "TransactionSearch"
    TRANSACTION_EXPORT = "TransactionExport"


class Classification(NamedTuple):
    shape: Shape
    value: Any


class NoMatch(NamedTuple):
    reason: str


class Classifier(Protocol):
    def classify(
        self, response: requests.Response, shapes: list[Shape]
    ) -> Classification: ...

    def test(self, response: requests.Response, shapes: list[Shape]) -> Shape: ...


def parse_amount(text: str) -> Decimal | None:
    """
    Parse an amount as displayed by Bankwest.

    Handles "$1,234.56", "-$10.00", "$10.00 DR" and "$10.00 CR". A blank
    cell gives None.
    """
    cleaned = text.replace("\xa0", " ").strip()
    if not cleaned:
        return None

    negative = False
    upper = cleaned.upper()
    if upper.endswith("DR"):
        negative = True
        cleaned = cleaned[:-2]
    elif upper.endswith("CR"):
        cleaned = cleaned[:-2]

    cleaned = cleaned.replace("$", "").replace(",", "").replace(" ", "")
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1]
    if cleaned.startswith("-"):
        negative = not negative
        cleaned = cleaned[1:]
    elif cleaned.startswith("+"):
        cleaned = cleaned[1:]

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not an amount: {text!r}") from None
    return -amount if negative else amount


def _text(el) -> str:
    return " ".join(el.get_text(" ", strip=True).split()) if el else ""


def _is_hidden(el) -> bool:
    style = (el.get("style") or "").replace(" ", "").lower()
    return "display:none" in style or "visibility:hidden" in style


class _Page:
    """A response plus lazily built views of its body."""

    def __init__(self, response: requests.Response):
        self.response = response

    @cached_property
    def path(self) -> str:
        return urlparse(self.response.url or "").path.lower()

    @cached_property
    def is_html(self) -> bool:
        content_type = self.response.headers.get("Content-Type", "").lower()
        if "html" in content_type:
            return True
        return self.response.text.lstrip().startswith("<")

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.response.text, "lxml")

    @cached_property
    def has_password_field(self) -> bool:
        return self.is_html and self.soup.find("input", type="password") is not None


class PageClassifier:
    """Default classifier for Bankwest Online Banking responses.

    Each shape has a matcher that either returns a Classification or a
    NoMatch explaining why the response is not that shape. Shapes are tried
    in the order given and the first match wins.
    """

    def __init__(self):
        self._matchers = {
            Shape.ACCOUNTS: self._match_accounts,
            Shape.LOGIN: self._match_login,
            Shape.LOGOUT: self._match_logout,
            Shape.TRANSACTION_SEARCH: self._match_transaction_search,
            Shape.TRANSACTION_EXPORT: self._match_transaction_export,
        }

    def classify(
        self, response: requests.Response, shapes: list[Shape]
    ) -> Classification:
        """
        Classify a response as the first matching shape and parse it.

        Args:
            response: Response to classify
            shapes: Acceptable shapes, highest priority first

        Returns:
            Classification with the matched shape and its parsed value

        Raises:
            UnrecognisedResponse: If none of the shapes match
            ParseError: If a shape matched but its contents are malformed
        """
        page = _Page(response)
        reasons = {}
        for shape in shapes:
            result = self._matchers[shape](page)
            if isinstance(result, NoMatch):
                reasons[shape.value] = result.reason
                continue
            logger.debug("Response from %s classified as %s", response.url, shape.value)
            return result

        names = ", ".join(shape.value for shape in shapes)
        raise UnrecognisedResponse(
            f"Unexpected response from {response.url} "
            f"(status {response.status_code}); expected one of: {names}",
            shapes=shapes,
            url=response.url,
            status_code=response.status_code,
            reasons=reasons,
        )

    def test(self, response: requests.Response, shapes: list[Shape]) -> Shape:
        """Classify a response, returning only the matched shape."""
        return self.classify(response, shapes).shape

    def _parse_error(self, page: _Page, shape: Shape, message: str) -> ParseError:
        return ParseError(
            f"{shape.value} page from {page.response.url} could not be parsed: {message}",
            shapes=[shape],
            url=page.response.url,
            status_code=page.response.status_code,
        )

    def _match_login(self, page: _Page) -> Classification | NoMatch:
        if not page.is_html:
            return NoMatch("not an HTML page")
        if page.path.endswith("logon.aspx") or page.has_password_field:
            return Classification(Shape.LOGIN, None)
        return NoMatch("no login form")

    def _match_logout(self, page: _Page) -> Classification | NoMatch:
        if not page.is_html:
            return NoMatch("not an HTML page")
        if page.has_password_field:
            return NoMatch("page asks for a password")
        if page.path.endswith(("logout.aspx", "logoutsuccess.aspx")):
            return Classification(Shape.LOGOUT, None)
        return NoMatch(f"not a logout page: {page.path}")

    def _match_accounts(self, page: _Page) -> Classification | NoMatch:
        if not page.is_html:
            return NoMatch("not an HTML page")
        table = page.soup.select_one(f"table[id$='{BALANCES_TABLE_ID_SUFFIX}']")
        if table is None:
            return NoMatch("no balances table")

        accounts = []
        for row in table.find_all("tr"):
            cells = row.find_all("td")
            if len(cells) < 6:
                continue
            values = [_text(cell) for cell in cells[:6]]
            # Header and total rows carry no account number
            if not ACCOUNT_PATTERN.fullmatch(values[1]):
                continue
            try:
                balances = [parse_amount(value) for value in values[2:6]]
            except ValueError as e:
                raise self._parse_error(page, Shape.ACCOUNTS, str(e)) from e
            accounts.append(Account(values[0], values[1], *balances))

        logger.debug("Parsed %d accounts", len(accounts))
        return Classification(Shape.ACCOUNTS, accounts)

    def _match_transaction_search(self, page: _Page) -> Classification | NoMatch:
        if not page.is_html:
            return NoMatch("not an HTML page")
        if page.soup.find("input", attrs={"name": FROM_DATE_FIELD}) is None:
            return NoMatch("no transaction search form")

        errors = []
        for selector in ERROR_SELECTORS:
            for el in page.soup.select(selector):
                if _is_hidden(el):
                    continue
                items = el.find_all("li")
                texts = [_text(li) for li in items] if items else [_text(el)]
                for text in texts:
                    if text and text not in errors:
                        errors.append(text)
        return Classification(Shape.TRANSACTION_SEARCH, errors)

    def _match_transaction_export(self, page: _Page) -> Classification | NoMatch:
        if page.is_html:
            return NoMatch("HTML page, not an export file")

        text = page.response.text.lstrip("\ufeff")
        rows = csv.reader(io.StringIO(text))
        try:
            header = [column.strip() for column in next(rows, [])]
        except csv.Error as e:
            return NoMatch(f"not readable as CSV: {e}")
        if "Transaction Date" not in header or "Narration" not in header:
            return NoMatch("no transaction export header")

        transactions = []
        try:
            for row in rows:
                if not any(cell.strip() for cell in row):
                    continue
                record = {name: value.strip() for name, value in zip(header, row)}
                transactions.append(self._transaction_from_record(record))
        except (KeyError, ValueError, csv.Error) as e:
            raise self._parse_error(
                page, Shape.TRANSACTION_EXPORT, f"line {rows.line_num}: {e}"
            ) from e

        logger.debug("Parsed %d transactions", len(transactions))
        return Classification(Shape.TRANSACTION_EXPORT, transactions)

    @staticmethod
    def _transaction_from_record(record: dict[str, str]) -> Transaction:
        account = " ".join(record.get("Account Number", "").split())
        bsb = record.get("BSB Number", "")
        if bsb and not account.startswith(bsb):
            account = f"{bsb} {account}"

        debit = parse_amount(record.get("Debit", "")) or Decimal("0")
        credit = parse_amount(record.get("Credit", "")) or Decimal("0")

        return Transaction(
            account=account,
            date=parse_date(record["Transaction Date"]),
            narrative=record["Narration"],
            amount=abs(credit) - abs(debit),
            cheque_num=record.get("Cheque Number") or None,
            balance=parse_amount(record.get("Balance", "")),
            type=record.get("Transaction Type") or None,
        )
