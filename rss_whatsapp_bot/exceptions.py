"""Error types for RSS WhatsApp Bot."""


class FeedBotError(Exception):
    """Base class for all bot errors."""


class ConfigurationError(FeedBotError):
    """Required settings are missing or invalid."""


class StorageError(FeedBotError):
    """The feeds file cannot be read or written."""


class FetchError(FeedBotError):
    """A feed could not be downloaded or parsed."""


class ExtractionError(FeedBotError):
    """A parsed document has a structure the extractor cannot walk."""


class DeliveryError(FeedBotError):
    """The messaging endpoint rejected a message."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
