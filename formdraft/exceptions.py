class InputTooLargeError(Exception):
    """Raised when pasted text exceeds the configured size limit."""


class InvalidFormError(Exception):
    """Raised when a question set cannot be evaluated (e.g. duplicate ids)."""
