from typing import Optional, List, Dict, Any
from datetime import date
import math

import psycopg
from psycopg import Connection

from ..errors import DatastoreError
from ..models.invoice import InvoiceFields

# Inserts one invoice for an existing customer and returns the generated id.
# The customer_id foreign key is checked by Postgres, not here.
def create_invoice(conn: Connection, invoice: InvoiceFields, today: date) -> str:
    sql = """
    INSERT INTO invoices (customer_id, amount, status, date)
    VALUES (%(customer_id)s, %(amount)s, %(status)s, %(date)s)
    RETURNING id;
    """
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute(sql, {
                "customer_id": invoice.customer_id,
                "amount": invoice.amount_in_cents,
                "status": invoice.status,
                "date": today,
            })
            return cur.fetchone()[0]
    except psycopg.Error as exc:
        raise DatastoreError("insert into invoices failed") from exc

# Replaces customer, amount, status and date of one invoice.
# An id that matches no row is not an error: rowcount is not inspected.
def update_invoice(conn: Connection, invoice_id: str, invoice: InvoiceFields, today: date) -> None:
    sql = """
    UPDATE invoices
    SET customer_id = %(customer_id)s, amount = %(amount)s, status = %(status)s, date = %(date)s
    WHERE id = %(id)s;
    """
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute(sql, {
                "id": invoice_id,
                "customer_id": invoice.customer_id,
                "amount": invoice.amount_in_cents,
                "status": invoice.status,
                "date": today,
            })
    except psycopg.Error as exc:
        raise DatastoreError(f"update of invoice {invoice_id} failed") from exc

# Removes one invoice. Deleting an id that does not exist is a no-op.
def delete_invoice(conn: Connection, invoice_id: str) -> None:
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("DELETE FROM invoices WHERE id = %s", (invoice_id,))
    except psycopg.Error as exc:
        raise DatastoreError(f"delete of invoice {invoice_id} failed") from exc


def _search_params(query: str) -> Dict[str, Any]:
    return {"pattern": f"%{query}%"}

_SEARCH_WHERE = """
    WHERE customers.name ILIKE %(pattern)s
       OR customers.email ILIKE %(pattern)s
       OR invoices.amount::text ILIKE %(pattern)s
       OR invoices.date::text ILIKE %(pattern)s
       OR invoices.status ILIKE %(pattern)s
"""

# Lists invoices with their customer, newest first.
# `query` is matched case-insensitively against customer, amount, date and status.
def list_invoices(conn: Connection, query: str = "", limit: int = 6, offset: int = 0) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            f"""
            SELECT invoices.id, invoices.customer_id, customers.name, customers.email,
                   invoices.amount, invoices.status, invoices.date
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            {_SEARCH_WHERE}
            ORDER BY invoices.date DESC
            LIMIT %(limit)s OFFSET %(offset)s
            """,
            {**_search_params(query), "limit": limit, "offset": offset},
        )
        columns = [col[0] for col in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]


# Number of pages `list_invoices` can return for `query`; at least 1.
def count_invoice_pages(conn: Connection, query: str = "", page_size: int = 6) -> int:
    with conn.cursor() as cur:
        cur.execute(
            f"""
            SELECT COUNT(*)
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            {_SEARCH_WHERE}
            """,
            _search_params(query),
        )
        (total, ) = cur.fetchone()
    return max(1, math.ceil(total / page_size))


# Fetches a single invoice for the edit form. Returns None if not found.
def get_invoice(conn: Connection, invoice_id: str) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT id, customer_id, amount, status, date
            FROM invoices WHERE id = %s
            """,
            (invoice_id,),
        )
        row = cur.fetchone()
        if not row:
            return None
        columns = [c[0] for c in cur.description]
        return dict(zip(columns, row))
