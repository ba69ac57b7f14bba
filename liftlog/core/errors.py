"""Domain errors raised by the service layer. Endpoints map them to HTTP status codes."""


class LiftlogError(Exception):
    """Base class for domain errors."""


class ExerciseAlreadyExists(LiftlogError):
    def __init__(self, name: str):
        super().__init__(f"Exercise {name!r} already exists")
        self.name = name


class ExerciseNotFound(LiftlogError):
    def __init__(self, name: str):
        super().__init__(f"Exercise {name!r} not found")
        self.name = name


class LogEntryNotFound(LiftlogError):
    def __init__(self, entry_id):
        super().__init__(f"Log entry {entry_id} not found")
        self.entry_id = entry_id


class InvalidSetFields(LiftlogError, ValueError):
    """A set carries a key its exercise does not declare, or a negative value."""


class UnknownFormField(LiftlogError, ValueError):
    """The entry form was asked to edit a field outside the active shape."""


class AggregateConflict(LiftlogError):
    """Compare-and-swap on a user profile kept losing to concurrent writers."""

    def __init__(self, user_id: str, attempts: int):
        super().__init__(f"Profile {user_id!r} still contended after {attempts} attempts")
        self.user_id = user_id
        self.attempts = attempts
