"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidBusinessDayCountError(DomainException, ValueError):
    """A deadline projection was requested with a non-positive business-day count"""

    pass


class HolidaySourceUnavailableError(DomainException):
    """Holiday reference data could not be read"""

    pass


class RecordStoreError(DomainException):
    """The document store rejected a query or an update, or is unreachable"""

    pass


class DocumentNotFoundError(DomainException):
    """No document exists with the requested id"""

    pass


class DocumentAlreadyRespondedError(DomainException):
    """The document already has a final response date"""

    pass
