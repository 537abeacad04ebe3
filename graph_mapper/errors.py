class GraphMapperError(Exception):
    """Base exception for mapper-related errors."""

    pass


class InvalidConfigurationError(GraphMapperError):
    """Raised when a mapper configuration cannot be compiled."""

    pass


class ConfigurationConflictError(InvalidConfigurationError):
    """Raised when a path configuration combines keys that cannot be used together."""

    def __init__(self, target_path: str, message: str):
        self.target_path = target_path
        super().__init__(f"Target path '{target_path}': {message}")


class UnknownTargetPathError(GraphMapperError, KeyError):
    """Raised when pick() is asked for a target path the mapper does not expose."""

    def __init__(self, path: str):
        self.path = path
        self.message = f"The target path '{path}' does not exist."
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class UnknownMapperNameError(GraphMapperError, KeyError):
    """Raised when a registry lookup names a mapper that was never defined."""

    def __init__(self, name: str):
        self.name = name
        self.message = f"No mapper defined for '{name}'"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
