from typing import Dict, List


class FieldValidationError(Exception):
    """A form failed validation; `errors` maps field name -> messages."""

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__(f"invalid fields: {', '.join(sorted(errors))}")
        self.errors = errors


class FatalParseError(Exception):
    """A form could not be parsed at all and the request must be aborted.

    Only raised on the lenient update path; create and strict update
    report field errors instead.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("form could not be parsed")
        self.errors = errors


class DatastoreError(Exception):
    """A write against the invoices table failed.

    The original psycopg error is chained as __cause__ and is only ever
    logged, never shown to the user.
    """
