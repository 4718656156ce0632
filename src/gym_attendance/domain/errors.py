"""Domain errors raised by attendance operations."""


class AttendanceError(Exception):
    """Base class for attendance domain errors."""


class NotFoundError(AttendanceError):
    """Raised when a referenced user or attendance record does not exist."""

    _LABELS = {
        "user": "User",
        "record": "Gym attendance record",
    }

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        label = self._LABELS.get(entity, entity.capitalize())
        super().__init__(f"{label} with id {identifier} not found")


class InvalidInputError(AttendanceError):
    """Raised when an input value cannot be accepted."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
