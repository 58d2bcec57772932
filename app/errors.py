class TrackingError(Exception):
    """Base class for tracking failures."""


class InvalidEventBatch(TrackingError, ValueError):
    """The payload is not a record sequence at all."""


class CarrierAuthError(TrackingError):
    """The carrier refused or never issued an access token."""


class CarrierAPIError(TrackingError):
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Maersk API Error ({status_code})")
