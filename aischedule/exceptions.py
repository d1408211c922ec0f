"""Errors raised while preparing, running and decoding schedule generations."""


class InvalidRequirementsError(ValueError):
    """The submitted schedule requirements cannot be scheduled as given."""


class EntityNotFound(LookupError):
    """A referenced role, user or predefined shift does not exist."""


class ScheduleGenerationError(RuntimeError):
    """The algorithm did not reach an acceptable schedule."""
