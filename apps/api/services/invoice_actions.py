"""
Form actions behind the invoice dashboard.

Each action runs the same sequence, once, with no retries:

    validate -> write one row -> revalidate the invoice list -> redirect

A validation failure returns field errors and never touches the database.
A database failure returns a generic message; the real error is logged.
Only a successful write revalidates the cache and returns a Redirect.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Union

from psycopg import Connection

from ..errors import DatastoreError
from ..models.invoice import ActionState
from ..repos import invoices as invoice_repo
from ..settings import settings
from .navigation import Redirect, revalidate_and_redirect
from .page_cache import PageCache
from .validator import validate_invoice_form, validate_invoice_form_lenient

logger = logging.getLogger(__name__)

ActionResult = Union[ActionState, Redirect]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def create_invoice_action(
    conn: Connection,
    cache: PageCache,
    form: Mapping[str, Any],
    today: Optional[date] = None,
) -> ActionResult:
    result = validate_invoice_form(form)
    if not result.ok:
        return ActionState(errors=result.errors, message="Missing Fields. Failed to Create Invoice.")

    try:
        invoice_id = invoice_repo.create_invoice(conn, result.invoice, today or utc_today())
    except DatastoreError:
        logger.exception("Failed to create invoice for customer %s", result.invoice.customer_id)
        return ActionState(message="Database Error: Failed to Create Invoice.")

    logger.info("Created invoice %s", invoice_id)
    return revalidate_and_redirect(cache, settings.INVOICES_PATH)


def update_invoice_action(
    conn: Connection,
    cache: PageCache,
    invoice_id: str,
    form: Mapping[str, Any],
    today: Optional[date] = None,
    lenient: bool = False,
) -> ActionResult:
    """
    Replace an invoice with the submitted form.

    With `lenient=True` the form is checked with the loose schema and a
    parse failure raises FatalParseError instead of returning field errors.
    """
    if lenient:
        result = validate_invoice_form_lenient(form)
        invoice = result.unwrap()
    else:
        result = validate_invoice_form(form)
        if not result.ok:
            return ActionState(errors=result.errors, message="Missing Fields. Failed to Update Invoice.")
        invoice = result.invoice

    try:
        invoice_repo.update_invoice(conn, invoice_id, invoice, today or utc_today())
    except DatastoreError:
        logger.exception("Failed to update invoice %s", invoice_id)
        return ActionState(message="Database Error: Failed to Update Invoice.")

    logger.info("Updated invoice %s", invoice_id)
    return revalidate_and_redirect(cache, settings.INVOICES_PATH)


def delete_invoice_action(conn: Connection, cache: PageCache, invoice_id: str) -> ActionResult:
    try:
        invoice_repo.delete_invoice(conn, invoice_id)
    except DatastoreError:
        logger.exception("Failed to delete invoice %s", invoice_id)
        return ActionState(message="Database Error: Failed to Delete Invoice.")

    logger.info("Deleted invoice %s", invoice_id)
    return revalidate_and_redirect(cache, settings.INVOICES_PATH)
