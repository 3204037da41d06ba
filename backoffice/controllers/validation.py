"""
Tienda Back Office — Controller Input Helpers
===============================================

What:  Identifier parsing and body validation shared by the controllers.
Why:   Every check here runs before the first database call, so bad input
       is always answered with 400 and never reaches the data layer.
"""

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backoffice.exceptions import ValidationError
from backoffice.services.product_service import MAX_ID

ModelT = TypeVar("ModelT", bound=BaseModel)

INVALID_ID_MESSAGE = "Invalid ID"

# Longest digit run (leading zeros aside) that can still name a row
MAX_ID_DIGITS = len(str(MAX_ID))


def is_numeric_id(token: Any) -> bool:
    """True for non-empty strings of ASCII digits ("12"), False for "1.5", "-3", "١٢"."""
    return isinstance(token, str) and token.isascii() and token.isdigit()


def parse_id(token: Any) -> int:
    """
    Turns an identifier token into an int, or raises a 400.

    Digit strings too long for any stored id come back as MAX_ID + 1, which
    the services answer with "not found" without querying. int() is never
    handed such strings, since it rejects very long digit runs outright.
    """
    if isinstance(token, int) and not isinstance(token, bool) and token >= 0:
        return token
    if not is_numeric_id(token):
        raise ValidationError(message=INVALID_ID_MESSAGE, context={"id": repr(token)})
    digits = token.lstrip("0") or "0"
    if len(digits) > MAX_ID_DIGITS:
        return MAX_ID + 1
    return int(digits)


def _format_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.append({"field": field, "message": err["msg"]})
    return errors


def validate_body(schema: Type[ModelT], body: Any, message: str) -> ModelT:
    """
    Validate a decoded JSON body against `schema`.

    Every failing field is reported, not just the first one.

    Raises:
        ValidationError: body is not a JSON object, or any field is invalid (→ 400)
    """
    if not isinstance(body, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            errors=[{"field": "body", "message": "Expected a JSON object"}],
        )
    try:
        return schema.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError(message=message, errors=_format_errors(exc))
