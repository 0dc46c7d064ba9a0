"""Application exception taxonomy.

Every error the API reports deliberately is a BooksAPIError carrying the
HTTP status it maps to. Anything else reaching the app boundary is a 500.
"""


def _article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


class BooksAPIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str | list[str]):
        super().__init__(message)
        self.message = message


class ValidationError(BooksAPIError):
    """Raised when a payload or filter breaks a declared rule."""

    status_code = 400

    def __init__(self, errors: list[str]):
        super().__init__(list(errors))
        self.errors = list(errors)


class NotFoundError(BooksAPIError):
    """Raised when no row has the requested key."""

    status_code = 404

    def __init__(self, key: str, entity: str = "book", key_name: str = "isbn"):
        super().__init__(f"There is no {entity} with {_article(key_name)} {key_name} '{key}'")
        self.key = key
        self.entity = entity
        self.key_name = key_name


class ConflictError(BooksAPIError):
    """Raised when trying to create a record that already exists."""

    status_code = 409

    def __init__(self, key: str, entity: str = "book", key_name: str = "isbn"):
        super().__init__(f"{_article(entity).capitalize()} {entity} with {key_name} '{key}' already exists")
        self.key = key
        self.entity = entity
        self.key_name = key_name


class InternalError(BooksAPIError):
    """Opaque server-side failure."""

    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
