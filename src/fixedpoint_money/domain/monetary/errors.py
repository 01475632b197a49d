class InvalidArgumentError(ValueError):
    """Raised when a required argument is missing or cannot be used to build a value."""
