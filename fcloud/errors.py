class FcloudError(Exception):
    """Base class for errors raised by fcloud services"""


class NotFoundError(FcloudError):
    """Raised when an id does not reference a stored document"""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} not found: {item_id}")


class ConcurrentUpdateError(FcloudError):
    """Raised when a conditional update keeps losing to concurrent writers"""

    def __init__(self, kind: str, item_id: str, field: str, attempts: int):
        self.kind = kind
        self.item_id = item_id
        self.field = field
        self.attempts = attempts
        super().__init__(
            f"Could not update {field} on {kind} {item_id} after {attempts} attempts"
        )
