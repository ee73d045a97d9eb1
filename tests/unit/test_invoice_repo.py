from datetime import date
from decimal import Decimal
from uuid import uuid4

import psycopg
import pytest

from apps.api.errors import DatastoreError
from apps.api.models.invoice import ValidatedInvoice
from apps.api.repos import invoices as repo
from apps.api.repos.customers import list_customers


def make_invoice(amount="49.99"):
    return ValidatedInvoice(customerId="c1", amount=Decimal(amount), status="pending")


def test_create_returns_generated_id(conn):
    new_id = uuid4()
    conn.queue(["id"], [(new_id,)])

    assert repo.create_invoice(conn, make_invoice(), date(2026, 1, 2)) == new_id
    assert conn.transactions == 1
    assert conn.executed[0][1]["amount"] == 4999


def test_write_errors_become_datastore_errors(conn):
    cause = psycopg.errors.UniqueViolation("duplicate key")
    conn.fail_with = cause

    with pytest.raises(DatastoreError) as excinfo:
        repo.update_invoice(conn, "5", make_invoice(), date(2026, 1, 2))

    assert excinfo.value.__cause__ is cause
    assert conn.rollbacks == 1


def test_delete_does_not_check_rowcount(conn):
    repo.delete_invoice(conn, "missing")

    assert conn.executed == [("DELETE FROM invoices WHERE id = %s", ("missing",))]


def test_list_invoices_maps_columns_and_searches(conn):
    invoice_id, customer_id = uuid4(), uuid4()
    conn.queue(
        ["id", "customer_id", "name", "email", "amount", "status", "date"],
        [(invoice_id, customer_id, "Lee Robinson", "lee@robinson.com", 20348, "pending", date(2022, 11, 14))],
    )

    rows = repo.list_invoices(conn, query="lee", limit=6, offset=12)

    assert rows == [{
        "id": invoice_id,
        "customer_id": customer_id,
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "amount": 20348,
        "status": "pending",
        "date": date(2022, 11, 14),
    }]
    sql, params = conn.executed[0]
    assert "ILIKE %(pattern)s" in sql
    assert params == {"pattern": "%lee%", "limit": 6, "offset": 12}


@pytest.mark.parametrize("total, pages", [(0, 1), (6, 1), (7, 2), (13, 3)])
def test_count_invoice_pages(conn, total, pages):
    conn.queue(["count"], [(total,)])

    assert repo.count_invoice_pages(conn, page_size=6) == pages


def test_get_invoice_returns_none_when_missing(conn):
    conn.queue(["id", "customer_id", "amount", "status", "date"], [])

    assert repo.get_invoice(conn, str(uuid4())) is None


def test_list_customers(conn):
    customer_id = uuid4()
    conn.queue(["id", "name"], [(customer_id, "Delba de Oliveira")])

    assert list_customers(conn) == [{"id": customer_id, "name": "Delba de Oliveira"}]
