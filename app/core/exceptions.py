class CatalogLoadError(Exception):
    """Raised when the catalog CSV cannot be fetched or parsed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RequestValidationError(ValueError):
    """Raised when a recommendation request fails local validation, before any network call."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
