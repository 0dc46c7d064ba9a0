"""Test error messages and status codes."""
from core.errors import ConflictError, InternalError, NotFoundError, ValidationError


def test_not_found_defaults_to_books():
    error = NotFoundError("99")
    assert error.status_code == 404
    assert error.message == "There is no book with an isbn '99'"


def test_not_found_names_entity_and_key():
    error = NotFoundError("7", "author", "id")
    assert error.message == "There is no author with an id '7'"
    assert (error.entity, error.key_name, error.key) == ("author", "id", "7")

    assert NotFoundError("x", "shelf", "name").message == "There is no shelf with a name 'x'"


def test_conflict_names_entity_and_key():
    assert ConflictError("1").message == "A book with isbn '1' already exists"
    error = ConflictError("7", "author", "id")
    assert error.status_code == 409
    assert error.message == "An author with id '7' already exists"


def test_validation_and_internal():
    error = ValidationError(["a", "b"])
    assert error.status_code == 400
    assert error.message == error.errors == ["a", "b"]

    assert InternalError().status_code == 500
    assert InternalError().message == "Internal Server Error"
