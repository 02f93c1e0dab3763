"""Value objects returned by a Bankwest session."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass
class Account:
    """Balances of a single account as shown on the accounts page.

    Attributes:
        name: Account name as displayed (e.g., "Easy Transaction Account")
        number: BSB and account number in "BBB-BBB AAAAAAA" format
        current_balance: Ledger balance
        credit_limit: Credit limit, if the account has one
        uncleared_funds: Funds deposited but not yet cleared
        available_balance: Funds available to spend
    """
    name: str
    number: str
    current_balance: Decimal | None = None
    credit_limit: Decimal | None = None
    uncleared_funds: Decimal | None = None
    available_balance: Decimal | None = None


@dataclass
class Transaction:
    """A single exported transaction (credits positive, debits negative)"""
    account: str
    date: date
    narrative: str
    amount: Decimal
    cheque_num: str | None = None
    balance: Decimal | None = None
    type: str | None = None
