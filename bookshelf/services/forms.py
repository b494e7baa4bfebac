"""
Form Error Recovery

When a submitted form fails validation nothing is written. Instead the
form is shown again with the rejected input and a list of errors. This
module converts pydantic's ValidationError into that list.
"""

from pydantic import ValidationError

from bookshelf.schemas import FieldError


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "form"


def collect_form_errors(exc: ValidationError) -> list[FieldError]:
    """
    Convert a ValidationError into one FieldError per problem.

    Messages raised by our own validators ("Title is required") are used
    as they are. Pydantic's built-in messages get the field label in front
    so they still make sense outside the field they belong to.

    Args:
        exc: Error raised by BookForm.model_validate

    Returns:
        Errors in the order pydantic reported them
    """
    errors = []
    for error in exc.errors():
        field = _field_name(error["loc"])
        if error["type"] == "value_error":
            message = str(error["ctx"]["error"])
        else:
            message = f"{field.capitalize()}: {error['msg']}"
        errors.append(FieldError(field=field, message=message))
    return errors


def echo_form(form_data: dict[str, str], **extra: object) -> dict[str, object]:
    """
    Build the values to put back into a rejected form.

    The raw submitted strings are used so the user sees exactly what they
    typed, not a normalised version of it.
    """
    echoed: dict[str, object] = {
        "title": form_data.get("title", ""),
        "author": form_data.get("author", ""),
        "genre": form_data.get("genre", ""),
        "year": form_data.get("year", ""),
    }
    echoed.update(extra)
    return echoed
