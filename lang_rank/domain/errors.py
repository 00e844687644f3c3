"""Exceptions raised by the language ranking pipeline."""


class LangRankError(Exception):
    """Base class for every fatal pipeline error."""
    pass


class ConfigurationError(LangRankError):
    """Raised when settings are missing or cannot be loaded."""
    pass


class FetchError(LangRankError):
    """Raised when a GitHub API request fails or returns a non-success status."""

    def __init__(self, message: str, url: str = "", status_code: int = 0):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class EmptyResultError(LangRankError):
    """Raised when there is nothing left to aggregate or chart."""
    pass


class NoRepositoriesError(EmptyResultError):
    """Raised when no repositories remain after the fork/archive filters."""

    def __init__(self, message: str = "no repositories after filtering"):
        super().__init__(message)


class NoLanguageDataError(EmptyResultError):
    """Raised when the ranking is empty or sums to zero bytes."""

    def __init__(self, message: str = "no language data to chart"):
        super().__init__(message)
