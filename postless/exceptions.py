"""postless custom exceptions."""

class PostlessError(Exception):
    """Base exception for postless."""
    pass

class WorkspaceError(PostlessError):
    """Raised when the workspace directory layout is missing or incomplete."""
    pass

class ConfigError(PostlessError):
    """Raised when config.json or secret.json cannot be loaded."""
    pass

class StorageError(PostlessError):
    """Raised when a file cannot be read or written."""
    pass

class RequestFileError(PostlessError):
    """Raised when a request definition file cannot be parsed."""
    pass
