class QRMapperError(Exception):
    """Base class for errors raised by the service."""


class ConfigurationError(QRMapperError):
    """The store connection parameters are missing."""


class StoreError(QRMapperError):
    """A read or write against the badge store failed."""
