"""
Errors raised by the notification layer.

A disabled notification category is NOT an error: senders return None.
"""


class NotificationError(Exception):
    """Base class for notification failures."""


class InvalidArgument(NotificationError, ValueError):
    """Required context or field missing from a call (caller bug)."""


class StorageError(NotificationError):
    """The backing store rejected a read or write."""
