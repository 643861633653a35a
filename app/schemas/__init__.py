from .ticket import GuestStatusRead, TicketRead

__all__ = ["GuestStatusRead", "TicketRead"]
