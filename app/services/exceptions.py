"""Queue service exceptions.

Raised by the store and the lifecycle service; the routes and the
application exception handlers turn them into HTTP responses.
"""


class QueueError(Exception):
    """Base queue service exception."""

    status_code = 500


class TicketNotFound(QueueError):
    """No ticket with the requested id."""

    status_code = 404

    def __init__(self, ticket_id: object):
        self.ticket_id = ticket_id
        super().__init__(f"Ticket not found: {ticket_id}")


class InvalidInput(QueueError):
    """Rejected form or argument value."""

    status_code = 400


class CodeEncodingError(QueueError):
    """Text does not fit in a QR code at the configured error correction level."""


class StoreFailure(QueueError):
    """The database could not complete the operation."""
