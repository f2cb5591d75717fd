"""
Error taxonomy for the customer portal.

Services raise these; the handlers registered in ``app.main`` turn anything
that reaches the transport layer into a ``{"success": false, "error": ...}``
payload so no component failure surfaces as an unhandled 500.
"""


class PortalError(Exception):
    """Base class for component-level failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Missing or malformed form input."""

    status_code = 400


class ForbiddenError(PortalError):
    """The caller does not own the document it is acting on."""

    status_code = 403


class NotFoundError(PortalError):
    """A booking, user or other document does not exist."""

    status_code = 404


class ConflictError(PortalError):
    """The customer already holds an active booking on the requested date."""

    status_code = 409


class StoreError(PortalError):
    """An underlying document-store call failed."""

    status_code = 503


class LoginRequired(Exception):
    """Raised by the session guard; answered with a redirect to the login page."""
