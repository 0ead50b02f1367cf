"""
Domain error taxonomy.

Repositories raise these; the API layer maps each base class onto an HTTP
status (not-found -> 404, conflict -> 409, invalid data -> 422).
"""


class JournalError(Exception):
    """Root of every error raised by the journal domain."""


class NotFoundError(JournalError):
    pass


class ConflictError(JournalError):
    pass


class InvalidDataError(JournalError):
    pass


class DriverNotFound(NotFoundError):
    def __init__(self, pseudonym: str):
        super().__init__(f"Driver {pseudonym!r} not found")
        self.pseudonym = pseudonym


class DriverAlreadyExists(ConflictError):
    def __init__(self, pseudonym: str):
        super().__init__(f"Driver {pseudonym!r} already exists")
        self.pseudonym = pseudonym


class LocationNotFound(NotFoundError):
    def __init__(self, identifier):
        super().__init__(f"Location {identifier!r} not found")
        self.identifier = identifier


class LocationNameTaken(ConflictError):
    def __init__(self, name: str):
        super().__init__(f"A location named {name!r} already exists")
        self.name = name


class LocationInUse(ConflictError):
    """The location is still referenced by at least one stop."""

    def __init__(self, identifier):
        super().__init__(f"Location {identifier!r} is referenced by a stop")
        self.identifier = identifier


class RideNotFound(NotFoundError):
    def __init__(self, identifier):
        super().__init__(f"Ride {identifier!r} not found")
        self.identifier = identifier


class InvalidRide(InvalidDataError):
    """Arrival must come strictly after departure, in time and on the odometer."""
