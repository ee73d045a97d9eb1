from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from psycopg import Connection
from starlette.concurrency import run_in_threadpool

from ..db import get_conn
from ..settings import settings
from ..models.customer import Customer
from ..models.invoice import ActionState, InvoicePage, InvoiceRow
from ..repos.customers import list_customers as repo_list_customers
from ..repos.invoices import (
    count_invoice_pages,
    get_invoice as repo_get_invoice,
    list_invoices as repo_list_invoices,
)
from ..services.invoice_actions import (
    ActionResult,
    create_invoice_action,
    delete_invoice_action,
    update_invoice_action,
)
from ..services.page_cache import PageCache, get_page_cache

router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"])


def to_response(result: ActionResult):
    """Redirect on success; otherwise the form state, 422 for field errors, 500 for the rest."""
    if isinstance(result, ActionState):
        status_code = 422 if result.errors else 500
        return JSONResponse(result.model_dump(exclude_none=True), status_code=status_code)
    return RedirectResponse(result.location, status_code=result.status_code)

# Invoice list, served from the page cache until a write revalidates it
@router.get("", response_model=InvoicePage)
def list_invoices(
    query: str = Query("", description="Search customer, amount, date or status"),
    page: int = Query(1, ge=1),
    conn: Connection = Depends(get_conn),
    cache: PageCache = Depends(get_page_cache),
):
    def render() -> InvoicePage:
        items = repo_list_invoices(
            conn,
            query=query,
            limit=settings.PAGE_SIZE,
            offset=(page - 1) * settings.PAGE_SIZE,
        )
        return InvoicePage(
            items=items,
            query=query,
            page=page,
            total_pages=count_invoice_pages(conn, query=query, page_size=settings.PAGE_SIZE),
        )

    return cache.get_or_render(settings.INVOICES_PATH, render, variant=f"query={query}&page={page}")

# Customers for the create/edit form picker
@router.get("/customers", response_model=List[Customer])
def list_customers(conn: Connection = Depends(get_conn)):
    return repo_list_customers(conn)

# Single invoice for the edit form
@router.get("/{invoice_id}", response_model=InvoiceRow)
def get_invoice(invoice_id: UUID, conn: Connection = Depends(get_conn)):
    inv = repo_get_invoice(conn, str(invoice_id))
    if not inv:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return inv

@router.post("/create")
async def create_invoice(
    request: Request,
    conn: Connection = Depends(get_conn),
    cache: PageCache = Depends(get_page_cache),
):
    form = await request.form()
    result = await run_in_threadpool(create_invoice_action, conn, cache, dict(form))
    return to_response(result)

@router.post("/{invoice_id}/edit")
async def update_invoice(
    invoice_id: str,
    request: Request,
    conn: Connection = Depends(get_conn),
    cache: PageCache = Depends(get_page_cache),
):
    form = await request.form()
    result = await run_in_threadpool(
        update_invoice_action,
        conn,
        cache,
        invoice_id,
        dict(form),
        lenient=settings.UPDATE_VALIDATION == "lenient",
    )
    return to_response(result)

@router.post("/{invoice_id}/delete")
def delete_invoice(
    invoice_id: str,
    conn: Connection = Depends(get_conn),
    cache: PageCache = Depends(get_page_cache),
):
    return to_response(delete_invoice_action(conn, cache, invoice_id))
