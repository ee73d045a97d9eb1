from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Any, Dict, List, Literal, Optional, Annotated
import datetime
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

# Largest amount whose cents fit the INTEGER amount column
MAX_AMOUNT = Decimal("21474836.47")

Money = Annotated[Decimal, Field(max_digits=18, decimal_places=2, le=MAX_AMOUNT)]
InvoiceStatus = Literal["pending", "paid"]


def to_minor_units(amount: Decimal) -> int:
    """Scale a currency amount to cents, e.g. Decimal("49.99") -> 4999."""
    return int((amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class InvoiceFields(BaseModel):
    """Common shape of a parsed invoice form. Form keys are camelCase."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    customer_id: str
    amount: Decimal
    status: InvoiceStatus

    # Blank behaves like 0, as the form's number coercion does
    @field_validator("amount", mode="before")
    @classmethod
    def _blank_amount_is_zero(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return Decimal(0)
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_minor_units(self.amount)


class ValidatedInvoice(InvoiceFields):
    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Money
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise PydanticCustomError("amount_not_positive", "Please enter an amount greater than $0")
        return value


class LenientInvoice(InvoiceFields):
    """Loose update schema: any customer string, any finite number that fits in cents."""

    customer_id: str = Field(..., alias="customerId")
    amount: Annotated[Decimal, Field(allow_inf_nan=False, ge=-MAX_AMOUNT, le=MAX_AMOUNT)]
    status: InvoiceStatus


class InvoiceRow(BaseModel):
    id: UUID
    customer_id: UUID
    name: Optional[str] = None
    email: Optional[str] = None
    amount: int = Field(..., description="Amount in cents")
    status: InvoiceStatus
    date: datetime.date


class InvoicePage(BaseModel):
    items: List[InvoiceRow]
    query: str
    page: int
    total_pages: int


class ActionState(BaseModel):
    """What a failed form action hands back to the form."""

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None
