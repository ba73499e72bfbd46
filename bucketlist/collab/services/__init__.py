"""Services for bucket collaboration."""

from .invites import InviteService
from .roster import RosterService
from .slots import SlotService

__all__ = ["InviteService", "RosterService", "SlotService"]
