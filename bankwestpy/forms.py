"""Helpers for re-submitting ASP.NET Web Forms pages."""

import logging
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

ASPNET_FORM_ID = "aspnetForm"


def find_form(
    document: requests.Response | str,
    form_id: str = ASPNET_FORM_ID,
) -> Tag | None:
    """
    Parse a page and locate the form to re-submit.

    Args:
        document: Fetched page, as a response or raw HTML
        form_id: Id of the form to find (default: aspnetForm)

    Returns:
        The form with the given id, else the first form, else None
    """
    html = document.text if isinstance(document, requests.Response) else document
    soup = BeautifulSoup(html, "lxml")
    form = soup.find("form", id=form_id)
    if form is None:
        form = soup.find("form")
    return form


def extract_form_tokens(
    document: requests.Response | str | Tag | None,
    form_id: str = ASPNET_FORM_ID,
) -> dict[str, str]:
    """
    Extract the hidden input fields of a form.

    These carry the server's page state (__VIEWSTATE, __EVENTVALIDATION and
    friends) and must be posted back unchanged with the next submission.

    Args:
        document: Fetched page (response or raw HTML), or a form already
            located with find_form
        form_id: Id of the form to read when a page is given (default: aspnetForm)

    Returns:
        Mapping of field name to value, in page order
    """
    if isinstance(document, (requests.Response, str)):
        form = find_form(document, form_id)
    else:
        form = document
    if form is None:
        logger.debug("No form found; no hidden tokens to carry forward")
        return {}

    tokens = {}
    for field in form.find_all("input", type="hidden"):
        name = field.get("name")
        if name:
            tokens[name] = field.get("value", "")
    logger.debug("Extracted %d hidden form tokens", len(tokens))
    return tokens


def form_action(form: Tag | None, page_url: str) -> str:
    """
    Work out where a form submits to.

    Args:
        form: Form located with find_form, or None when the page has none
        page_url: URL of the page the form came from

    Returns:
        Absolute URL of the form's action, or the page URL when it has none
    """
    action = form.get("action") if form is not None else None
    if not action:
        return page_url
    return urljoin(page_url, action)
