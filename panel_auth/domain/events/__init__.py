"""Domain Events.

All events are immutable and represent significant business occurrences that
other parts of the system may need to react to.
"""

from .password_reset_events import BaseDomainEvent, PasswordResetCompletedEvent

__all__ = ["BaseDomainEvent", "PasswordResetCompletedEvent"]
