"""Diagnostic dumps for reported errors."""

import json
from typing import Any

from netlify_action.core.exceptions import ActionError


def serialize_error(error: BaseException, label: str | None = None) -> dict[str, Any]:
    """Build a JSON-friendly description of an error."""
    if isinstance(error, ActionError):
        data = error.to_dict()
    else:
        data = {
            "error": type(error).__name__,
            "message": str(error),
            "details": {},
        }
    if error.__cause__ is not None:
        data["cause"] = {
            "error": type(error.__cause__).__name__,
            "message": str(error.__cause__),
        }
    if label:
        data = {"label": label, **data}
    return data


def format_error_dump(
    error: BaseException,
    label: str | None = None,
    pretty: bool = True,
) -> str:
    """Render an error as a JSON diagnostic dump.

    Args:
        error: The error to describe
        label: Short description of the step that failed
        pretty: Whether to pretty-print the JSON

    Returns:
        The JSON document, without a trailing newline
    """
    data = serialize_error(error, label)
    if pretty:
        return json.dumps(data, indent=2, default=str, ensure_ascii=False)
    return json.dumps(data, default=str, ensure_ascii=False)
