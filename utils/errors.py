"""
utils/errors.py
---------------
Error taxonomy shared by every layer.

Each error carries the HTTP status the API surface answers with, so
handlers never need to know which layer raised it.
"""

from typing import Optional


class DashboardError(Exception):
    """Base class for every expected failure in the dashboard."""

    status_code = 500
    public_message = "Server Error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationFailure(DashboardError):
    """A required field is missing or a field violates its constraint."""

    status_code = 400
    public_message = "Validation failed"

    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages) or self.public_message)
        self.messages = list(messages)


class NotFound(DashboardError):
    """The requested record identifier does not exist."""

    status_code = 404

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.record_id = record_id
        self.public_message = f"{kind} not found"


class StoreFailure(DashboardError):
    """The record store is unavailable or rejected the operation."""


class IntegrationFailure(DashboardError):
    """A remote service (AI or calendar) was unreachable or errored."""

    public_message = "Integration failed"


class IntegrationFormatFailure(IntegrationFailure):
    """A remote service answered, but not in the agreed format."""


class InvalidResponseFormat(IntegrationFormatFailure):
    """The AI reply is not valid JSON matching the insight contract."""

    public_message = "AI analysis failed."


class CalendarAuthorizationError(IntegrationFailure):
    """No usable stored credential for the external calendar account."""

    public_message = "Calendar is not authorized. Run manual auth flow."
