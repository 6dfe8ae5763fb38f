"""Domain errors."""


class ValidationError(Exception):
    """Command arguments are missing or malformed."""
