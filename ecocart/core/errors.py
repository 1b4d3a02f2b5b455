# ecocart/core/errors.py
"""
Domain errors raised by the engine and its services.
Each carries the HTTP status the API layer answers with (see main.py handlers).
"""


class EcoError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InputValidationError(EcoError):
    """Malformed or missing product / cart-line fields."""
    status_code = 400


class NotFoundError(EcoError):
    status_code = 404


class ConstraintViolation(EcoError):
    """Operation is well-formed but not allowed (e.g. cross-category swap)."""
    status_code = 409


class CartConflict(EcoError):
    """Cart document changed between read and conditional write."""
    status_code = 409


class ClassifierUnavailable(EcoError):
    status_code = 503


class ExternalServiceError(EcoError):
    """LLM / third-party failure. Callers fall back instead of surfacing it."""
    status_code = 502
