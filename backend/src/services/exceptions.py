"""Shared exceptions for bookmark validation and persistence."""


class BookmarkValidationError(Exception):
    """
    Base exception for rejected bookmark payloads.

    Every subclass carries the name of the rule that rejected the payload and a fixed,
    human-readable message. The message text is part of the public API and is returned
    verbatim in 400 responses.
    """

    rule: str = "invalid"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingRequiredFieldError(BookmarkValidationError):
    """Raised when title, url or rating is missing from a create payload."""

    rule = "missing_required_field"

    def __init__(self) -> None:
        # "requried" is kept as-is: existing clients match on this exact message.
        super().__init__("Title, url, and rating are requried.")


class InvalidFieldTypeError(BookmarkValidationError):
    """Raised when a text field is supplied with a non-string value."""

    rule = "invalid_type"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"The {field} field must be a string.")


class InvalidUrlSchemeError(BookmarkValidationError):
    """Raised when the url doesn't start with http:// or https://."""

    rule = "invalid_url_scheme"

    def __init__(self) -> None:
        super().__init__("URL must begin with 'http://' or 'https://'")


class InvalidRatingError(BookmarkValidationError):
    """Raised when the rating is not a number in the range [1, 6)."""

    rule = "invalid_rating"

    def __init__(self) -> None:
        super().__init__("Rating must be a number between 1 and 5")


class EmptyUpdateError(BookmarkValidationError):
    """Raised when a partial update carries no recognized field."""

    rule = "empty_update"

    def __init__(self) -> None:
        super().__init__("Please submit a valid field to be updated")


class BookmarkNotFoundError(Exception):
    """Raised when no bookmark exists for the requested ID."""

    message = "Bookmark ID does not exist."

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark {bookmark_id} does not exist")


class StorageError(Exception):
    """Raised when the database rejects or fails a bookmark operation."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Storage failure during bookmark {operation}")
