import pytest
from pydantic import ValidationError as PydanticValidationError

from app.schemas.task import TaskCreate, TaskQueryParams
from app.schemas.user import LoginRequest
from app.utils.validation import display_name, field_message, format_validation_errors


def _errors(model, **data):
    with pytest.raises(PydanticValidationError) as exc_info:
        model(**data)
    return format_validation_errors(exc_info.value)


def test_display_name():
    assert display_name("title") == "Title"
    assert display_name("due_date") == "DueDate"
    assert display_name("sort_by") == "SortBy"


def test_missing_field_is_required():
    assert _errors(TaskCreate) == [{"field": "title", "message": "Title is required"}]


def test_empty_string_is_required():
    assert _errors(TaskCreate, title="") == [{"field": "title", "message": "Title is required"}]


def test_string_length_bounds():
    assert _errors(TaskCreate, title="ab") == [
        {"field": "title", "message": "Title must be at least 3 characters"}
    ]
    assert _errors(TaskCreate, title="x" * 201) == [
        {"field": "title", "message": "Title must not exceed 200 characters"}
    ]
    assert _errors(TaskCreate, title="valid", description="d" * 2001) == [
        {"field": "description", "message": "Description must not exceed 2000 characters"}
    ]


def test_numeric_bounds():
    assert _errors(TaskQueryParams, page=-1) == [
        {"field": "page", "message": "Page must be at least 1"}
    ]
    assert _errors(TaskQueryParams, limit=101) == [
        {"field": "limit", "message": "Limit must not exceed 100"}
    ]


def test_not_a_number():
    assert _errors(TaskQueryParams, page="abc") == [
        {"field": "page", "message": "Page must be a numeric value"}
    ]


def test_oneof_lists_the_options():
    assert _errors(TaskQueryParams, sort_by="name") == [
        {
            "field": "sortby",
            "message": "SortBy must be one of: created_at, updated_at, due_date, priority, title",
        }
    ]
    assert _errors(TaskCreate, title="valid", status="done") == [
        {"field": "status", "message": "Status must be one of: pending, in_progress, completed"}
    ]


def test_email_format():
    assert _errors(LoginRequest, email="not-an-email", password="secret1") == [
        {"field": "email", "message": "Invalid email format"}
    ]


def test_bad_datetime():
    assert _errors(TaskCreate, title="valid", due_date="next tuesday") == [
        {"field": "duedate", "message": "DueDate must be a valid datetime in format RFC3339"}
    ]


def test_multiple_failures_are_all_reported():
    errors = _errors(LoginRequest, email="", password="abc")
    assert {"field": "email", "message": "Email is required"} in errors
    assert {"field": "password", "message": "Password must be at least 6 characters"} in errors


@pytest.mark.parametrize(
    "err, expected",
    [
        ({"type": "alpha"}, "Name must contain only alphabetic characters"),
        ({"type": "alphanum"}, "Name must contain only alphanumeric characters"),
        ({"type": "numeric"}, "Name must be a numeric value"),
        ({"type": "url_parsing"}, "Invalid URL format"),
        ({"type": "uri"}, "Invalid URI format"),
        ({"type": "len", "ctx": {"param": 8}}, "Name must be exactly 8 characters"),
        ({"type": "gte", "ctx": {"param": 2}}, "Name must be greater than or equal to 2"),
        ({"type": "lte", "ctx": {"param": 9}}, "Name must be less than or equal to 9"),
        ({"type": "greater_than", "ctx": {"gt": 0}}, "Name must be greater than 0"),
        ({"type": "less_than", "ctx": {"lt": 5}}, "Name must be less than 5"),
        ({"type": "something_else"}, "Invalid value for name"),
    ],
)
def test_rule_templates(err, expected):
    assert field_message("Name", err) == expected


def test_unstructured_error_has_no_field():
    assert format_validation_errors(ValueError("boom")) == [{"message": "boom"}]


def test_error_without_field_location_has_no_field():
    class BodyError(Exception):
        def errors(self):
            return [{"type": "json_invalid", "loc": ("body", 7), "msg": "JSON decode error"}]

    assert format_validation_errors(BodyError()) == [{"message": "JSON decode error"}]
