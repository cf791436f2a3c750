"""Exception classes for tmplsearch."""


class TemplateSearchError(Exception):
    """Base exception for tmplsearch errors."""

    pass


class ConfigError(TemplateSearchError, ValueError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with path and details."""
        self.path = path
        message = f"Invalid configuration in {path}"
        if details:
            message += f": {details}"
        super().__init__(message)


class TemplateCacheError(TemplateSearchError):
    """Raised when the template cache cannot be read."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with path and details."""
        self.path = path
        message = f"Template cache is unreadable at {path}"
        if details:
            message += f": {details}"
        super().__init__(message)
