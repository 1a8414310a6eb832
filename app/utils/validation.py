"""Turn pydantic validation failures into ``{field, message}`` items.

Messages follow a fixed per-rule template table that clients match on, so
wording changes here are breaking changes.
"""

import re

# Request parts that appear in FastAPI error locations but are not fields
_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}

_EXPECTED_OPTION = re.compile(r"'([^']*)'")

# Rule templates. {field} is the display name, {param} the rule argument.
MESSAGES = {
    "required": "{field} is required",
    "email": "Invalid email format",
    "min_string": "{field} must be at least {param} characters",
    "min": "{field} must be at least {param}",
    "max_string": "{field} must not exceed {param} characters",
    "max": "{field} must not exceed {param}",
    "oneof": "{field} must be one of: {param}",
    "gte": "{field} must be greater than or equal to {param}",
    "lte": "{field} must be less than or equal to {param}",
    "gt": "{field} must be greater than {param}",
    "lt": "{field} must be less than {param}",
    "len": "{field} must be exactly {param} characters",
    "alpha": "{field} must contain only alphabetic characters",
    "alphanum": "{field} must contain only alphanumeric characters",
    "numeric": "{field} must be a numeric value",
    "url": "Invalid URL format",
    "uri": "Invalid URI format",
    "datetime": "{field} must be a valid datetime in format {param}",
}

DATETIME_FORMAT = "RFC3339"

_URL_ERRORS = {"url_parsing", "url_type", "url_scheme", "url_syntax_violation", "url_too_long"}
_DATETIME_ERRORS = {
    "datetime_parsing",
    "datetime_type",
    "datetime_from_date_parsing",
    "datetime_object_invalid",
    "timezone_aware",
}
_NUMERIC_ERRORS = {"int_parsing", "int_type", "float_parsing", "float_type", "int_from_float"}


def display_name(name: str) -> str:
    """``due_date`` -> ``DueDate``."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def _field_from_loc(loc) -> str | None:
    for part in reversed(loc):
        if isinstance(part, str) and part not in _LOCATION_SOURCES:
            return part
    return None


def _options(expected: str) -> str:
    found = _EXPECTED_OPTION.findall(expected)
    return ", ".join(found) if found else expected


def _rule_for(err: dict) -> tuple[str | None, object]:
    """Map a pydantic error to a (rule, param) pair from the template table."""
    kind = err.get("type", "")
    ctx = err.get("ctx") or {}

    if kind == "missing":
        return "required", None
    if kind == "string_too_short":
        if err.get("input") == "":
            return "required", None
        return "min_string", ctx.get("min_length")
    if kind == "string_too_long":
        return "max_string", ctx.get("max_length")
    if kind == "too_short":
        return "min", ctx.get("min_length")
    if kind == "too_long":
        return "max", ctx.get("max_length")
    if kind == "greater_than_equal":
        return "min", ctx.get("ge")
    if kind == "less_than_equal":
        return "max", ctx.get("le")
    if kind == "greater_than":
        return "gt", ctx.get("gt")
    if kind == "less_than":
        return "lt", ctx.get("lt")
    if kind in ("literal_error", "enum"):
        return "oneof", _options(str(ctx.get("expected", "")))
    if kind == "value_error" and "email" in err.get("msg", "").lower():
        return "email", None
    if kind in _URL_ERRORS:
        return "url", None
    if kind in _DATETIME_ERRORS:
        return "datetime", DATETIME_FORMAT
    if kind in _NUMERIC_ERRORS:
        return "numeric", None
    # Custom validators raise PydanticCustomError using the rule name as type
    if kind in MESSAGES:
        return kind, ctx.get("param")
    return None, None


def field_message(field: str, err: dict) -> str:
    rule, param = _rule_for(err)
    if rule is None:
        return f"Invalid value for {field.lower()}"
    return MESSAGES[rule].format(field=field, param=param)


def format_validation_errors(exc: Exception) -> list[dict]:
    """Format a validation failure as a list of ``{field, message}`` items.

    Anything that is not a structured pydantic failure collapses into a
    single item carrying only the error text.
    """
    errors = getattr(exc, "errors", None)
    if not callable(errors):
        return [{"message": str(exc)}]

    items = []
    for err in errors():
        name = _field_from_loc(err.get("loc", ()))
        if name is None:
            items.append({"message": err.get("msg", str(exc))})
            continue
        field = display_name(name)
        items.append({"field": field.lower(), "message": field_message(field, err)})
    return items
