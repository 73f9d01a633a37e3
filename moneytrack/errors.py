"""Exceptions raised across moneytrack."""


class MoneytrackError(Exception):
    """Base class for moneytrack errors."""


class InvalidCategoryError(MoneytrackError, ValueError):
    """Raised when a category label or index is outside the fixed set."""


class MalformedDateError(MoneytrackError, ValueError):
    """Raised when a date or month period cannot be parsed."""


class StorageError(MoneytrackError, OSError):
    """Raised when expenses cannot be loaded from or saved to the store."""


class ExportError(MoneytrackError, OSError):
    """Raised when the spreadsheet export cannot be written."""


class ConfigError(MoneytrackError, ValueError):
    """Raised when the configuration file is unreadable."""
