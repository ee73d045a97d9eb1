from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from ..errors import FatalParseError, FieldValidationError
from .invoice import InvoiceFields

# ok           -> `invoice` is set
# field_errors -> recoverable, show `errors` next to the form fields
# fatal        -> the form could not be parsed; the caller aborts the request
ValidationKind = Literal["ok", "field_errors", "fatal"]

class ValidationResult(BaseModel):
    kind: ValidationKind
    invoice: Optional[InvoiceFields] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)  # e.g. {"amount": ["..."]}

    @property
    def ok(self) -> bool:
        return self.kind == "ok"

    def unwrap(self) -> InvoiceFields:
        """Return the invoice, or raise the error matching `kind`."""
        if self.kind == "fatal":
            raise FatalParseError(self.errors)
        if self.kind == "field_errors":
            raise FieldValidationError(self.errors)
        return self.invoice
