"""Format checks for the values submitted to the transaction search form.

Only the shape of each value is checked here. Whether an account exists or a
date range is acceptable is decided by the server.
"""

import re
from datetime import date, datetime

ACCOUNT_PATTERN = re.compile(r"[0-9]{3}-[0-9]{3} [0-9]{7}")
DATE_FORMAT = "%d/%m/%Y"
_DATE_PATTERN = re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}")


def check_account(account: str) -> str:
    """
    Check that an account reference is in "BBB-BBB AAAAAAA" format.

    Args:
        account: BSB and account number, e.g. "303-111 0012345"

    Returns:
        The account reference unchanged

    Raises:
        ValueError: If the reference is not in the expected format
    """
    if not isinstance(account, str) or not ACCOUNT_PATTERN.fullmatch(account):
        raise ValueError(
            f"Account must be in 'BBB-BBB AAAAAAA' format, got {account!r}"
        )
    return account


def format_date(value: date | datetime | str) -> str:
    """
    Render a date as the "DD/MM/YYYY" text the search form expects.

    Args:
        value: A date, a datetime (time is ignored) or a "DD/MM/YYYY" string

    Returns:
        The date as a "DD/MM/YYYY" string

    Raises:
        ValueError: If a string is not a real calendar date in that format
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, str) and _DATE_PATTERN.fullmatch(value):
        # strptime rejects impossible days such as 31/02/2013
        datetime.strptime(value, DATE_FORMAT)
        return value
    raise ValueError(f"Date must be a date or a 'DD/MM/YYYY' string, got {value!r}")


def format_optional_date(value: date | datetime | str | None) -> str:
    """Like format_date, but an absent date becomes the empty string."""
    if value is None or value == "":
        return ""
    return format_date(value)


def parse_date(text: str) -> date:
    """Parse a "DD/MM/YYYY" string into a date."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()
