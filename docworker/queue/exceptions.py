class QueueStoreError(Exception):
    """Raised when the queue backend cannot be reached or misbehaves."""


class MalformedJobError(QueueStoreError):
    """Raised when a stored queue item cannot be decoded into a Job."""
