from typing import Any, Dict, List, Mapping, Type

from pydantic import ValidationError

from ..models.invoice import InvoiceFields, LenientInvoice, ValidatedInvoice
from ..models.validation import ValidationResult

AMOUNT_MESSAGE = "Please enter an amount greater than $0"

# Fields whose every failure gets one friendly message
FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "status": "Please select an invoice status.",
}


def _message_for(field: str, error: Dict[str, Any]) -> str:
    if field in FIELD_MESSAGES:
        return FIELD_MESSAGES[field]
    if field == "amount" and error["type"] == "missing":
        return AMOUNT_MESSAGE
    return error["msg"]


def flatten_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """
    Collapse a pydantic ValidationError into {form field: [messages]}.

    Locations are reported under the form's own field names (the aliases),
    so the result can be rendered straight next to the inputs. Duplicate
    messages for one field are dropped.
    """
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        message = _message_for(field, error)
        messages = field_errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return field_errors


def _validate(schema: Type[InvoiceFields], form: Mapping[str, Any], failure_kind: str) -> ValidationResult:
    try:
        invoice = schema.model_validate(dict(form))
    except ValidationError as exc:
        return ValidationResult(kind=failure_kind, errors=flatten_errors(exc))
    return ValidationResult(kind="ok", invoice=invoice)


def validate_invoice_form(form: Mapping[str, Any]) -> ValidationResult:
    """Strict validation; failures come back as recoverable field errors."""
    return _validate(ValidatedInvoice, form, "field_errors")


def validate_invoice_form_lenient(form: Mapping[str, Any]) -> ValidationResult:
    """Loose validation; any failure is fatal for the request."""
    return _validate(LenientInvoice, form, "fatal")
