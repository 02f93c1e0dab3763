"""Shared fixtures: canned Bankwest pages wrapped in requests.Response objects."""

import pytest
import requests

from bankwestpy.session import ACCOUNTS_URI, BANKWEST_BASE_URL, LOGOUT_URI, TRANSACTIONS_URI

LOGIN_URI = BANKWEST_BASE_URL + "Logon.aspx"

ACCOUNTS_HTML = """
<html><head><title>Account Balances</title></head>
<body>
<form name="aspnetForm" method="post" action="Balances.aspx" id="aspnetForm">
<input type="hidden" name="__VIEWSTATE" value="dDwxMjM0NTY3ODk7Oz4=" />
<table id="_ctl0_ContentMain_grdBalances">
  <tr><th>Account Name</th><th>BSB / Account Number</th><th>Current Balance</th>
      <th>Credit Limit</th><th>Uncleared Funds</th><th>Available Balance</th></tr>
  <tr><td>Hero Transaction Account</td><td>303-111 0012345</td><td>$2,000.00</td>
      <td>&nbsp;</td><td>$0.00</td><td>$2,000.00</td></tr>
  <tr><td>Platinum Mastercard</td><td>303-111 0099999</td><td>$1,250.75 DR</td>
      <td>$10,000.00</td><td>$0.00</td><td>$8,749.25</td></tr>
  <tr><td>Hero Saver</td><td>303-111 0054321</td><td>$15,320.10</td>
      <td></td><td>$120.00</td><td>$15,200.10</td></tr>
  <tr><td>Total</td><td></td><td>$16,069.35</td><td></td><td></td><td></td></tr>
</table>
</form>
</body></html>
"""

SEARCH_HTML = """
<html><head><title>Transaction Search</title></head>
<body>
<form name="aspnetForm" method="post" action="TransactionSearch.aspx" id="aspnetForm">
<input type="hidden" name="__EVENTTARGET" id="__EVENTTARGET" value="" />
<input type="hidden" name="__EVENTARGUMENT" id="__EVENTARGUMENT" value="" />
<input type="hidden" name="__VS" id="__VS" value="1a2b3c" />
<input type="hidden" name="__VIEWSTATE" id="__VIEWSTATE" value="dDwtNTk4NjE0NjM7Oz4=" />
<input type="hidden" name="__EVENTVALIDATION" id="__EVENTVALIDATION" value="/wEWBgKp8YOMDw==" />
<input type="hidden" name="_ctl0:ContentButtonsLeft:txtSelectedList" value="" />
<div id="_ctl0_ContentMain_ValidationSummary1" style="color:Red;display:none;"></div>
<select name="_ctl0:ContentMain:ddlAccount">
  <option value="303-111 0012345">Hero Transaction Account</option>
</select>
<input name="_ctl0:ContentMain:dpFromDate:txtDate" type="text" value="" />
<span id="_ctl0_ContentMain_valFromDate" class="ErrorMessage"
      style="color:Red;visibility:hidden;">From Date is required</span>
<input name="_ctl0:ContentMain:dpToDate:txtDate" type="text" value="" />
</form>
</body></html>
"""

REJECTED_SEARCH_HTML = SEARCH_HTML.replace(
    '<div id="_ctl0_ContentMain_ValidationSummary1" style="color:Red;display:none;"></div>',
    '<div id="_ctl0_ContentMain_ValidationSummary1" style="color:Red;">'
    "<ul><li>From Date cannot be in the future.</li>"
    "<li>To Date cannot be before From Date.</li></ul></div>",
)

LOGIN_HTML = """
<html><head><title>Bankwest Online Banking - Login</title></head>
<body>
<form name="aspnetForm" method="post" action="Logon.aspx" id="aspnetForm">
<input type="hidden" name="__VIEWSTATE" value="dDwtMTIzOzs+" />
<input name="_ctl0:ContentMain:txtLoginID" type="text" />
<input name="_ctl0:ContentMain:txtLoginPassword" type="password" />
</form>
</body></html>
"""

LOGOUT_HTML = """
<html><head><title>Logged Out</title></head>
<body><p>You have successfully logged out of Bankwest Online Banking.</p></body></html>
"""

ERROR_HTML = """
<html><head><title>Error</title></head>
<body><p>Sorry, an unexpected error has occurred.</p></body></html>
"""

EXPORT_CSV = (
    "BSB Number,Account Number,Transaction Date,Narration,Cheque Number,"
    "Debit,Credit,Balance,Transaction Type\r\n"
    '303-111,0012345,02/01/2013,"EFTPOS PURCHASE SUPERMARKET PERTH",,45.20,,1954.80,WDL\r\n'
    '303-111,0012345,03/01/2013,"SALARY ACME PTY LTD",,,2500.00,4454.80,DEP\r\n'
    '303-111,0012345,04/01/2013,"CHEQUE 000123",000123,300.00,,4154.80,CHQ\r\n'
)


def make_response(
    body: str,
    url: str,
    content_type: str = "text/html; charset=utf-8",
    status_code: int = 200,
) -> requests.Response:
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = content_type
    response.url = url
    return response


@pytest.fixture
def accounts_page():
    return make_response(ACCOUNTS_HTML, ACCOUNTS_URI)


@pytest.fixture
def search_page():
    return make_response(SEARCH_HTML, TRANSACTIONS_URI)


@pytest.fixture
def rejected_search_page():
    return make_response(REJECTED_SEARCH_HTML, TRANSACTIONS_URI)


@pytest.fixture
def login_page():
    return make_response(LOGIN_HTML, LOGIN_URI)


@pytest.fixture
def logout_page():
    return make_response(LOGOUT_HTML, LOGOUT_URI)


@pytest.fixture
def error_page():
    return make_response(ERROR_HTML, BANKWEST_BASE_URL + "Error.aspx")


@pytest.fixture
def export_file():
    return make_response(EXPORT_CSV, TRANSACTIONS_URI, content_type="text/csv")


@pytest.fixture
def make_page():
    """Factory for one-off pages built in a test."""
    return make_response


@pytest.fixture
def search_html():
    return SEARCH_HTML
