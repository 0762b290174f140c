class ChecklistError(Exception):
    """Base for every error the client surfaces to a screen."""

    def __init__(self, message="", detail=None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ChecklistError):
    """Input rejected before any call to the store."""


class StoreError(ChecklistError):
    def __init__(self, message="", detail=None, status_code=None):
        super().__init__(message, detail)
        self.status_code = status_code


class StoreUnavailable(StoreError):
    """The store could not be reached (connection error or timeout)."""


class NotFound(StoreError):
    pass


class Conflict(StoreError):
    pass


class InvalidTransition(ChecklistError):
    pass
