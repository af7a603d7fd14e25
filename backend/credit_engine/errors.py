"""Error taxonomy for the weekly credit scoring engine.

Every write operation raises one of these instead of returning an error
flag, so the admin screens can tell "numbers don't add up" apart from
"you're not allowed to do that" and "nothing to delete".
"""


class CreditEngineError(Exception):
    """Base class for all scoring engine errors."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CreditEngineError):
    """Raised when caller-supplied numbers are out of range or inconsistent."""

    kind = "validation"


class PermissionDeniedError(CreditEngineError):
    """Raised when the actor lacks authority over the team or user."""

    kind = "permission"


class NotFoundError(CreditEngineError):
    """Raised when a referenced team, user or weekly record is missing."""

    kind = "not_found"


class StaleScoreError(CreditEngineError):
    """Raised when an upsert carries an outdated record version."""

    kind = "conflict"
