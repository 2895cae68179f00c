class ValidationError(ValueError):
    """Bad caller input. The message is returned as-is in the 400 envelope."""
