"""Contact service exceptions."""


class ContactError(Exception):
    """Base exception for contact operations.

    ``status_code`` is the HTTP status the API layer reports for the error.
    """

    status_code: int = 500
    message: str = "Contact operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class ContactValidationError(ContactError):
    """Raised when a submitted field fails its format check."""

    status_code = 400
    field: str = ""


class InvalidNameError(ContactValidationError):
    field = "name"
    message = "Name is required and must be at least 2 characters long"


class InvalidPhoneError(ContactValidationError):
    field = "phone"
    message = "Phone is required and must be 10-15 digits"


class InvalidEmailError(ContactValidationError):
    field = "email"
    message = "Invalid email format"


class DuplicateContactError(ContactError):
    """Raised when a unique field is already used by another contact."""

    status_code = 400
    field: str = ""


class DuplicatePhoneError(DuplicateContactError):
    field = "phone"
    message = "This phone number is already in use"


class DuplicateEmailError(DuplicateContactError):
    field = "email"
    message = "This email is already in use"


class ContactNotFoundError(ContactError):
    status_code = 404
    message = "Contact not found"


class StoreError(ContactError):
    """Raised when the persistence backend fails.

    ``detail`` carries the underlying error message for diagnostics.
    """

    status_code = 500

    def __init__(self, detail: str, message: str | None = None) -> None:
        self.detail = detail
        super().__init__(message)


class StoreConflictError(Exception):
    """Raised by a store when a write violates a storage-level unique constraint."""

    def __init__(self, field: str, detail: str = "") -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Unique constraint violated on '{field}': {detail}")
