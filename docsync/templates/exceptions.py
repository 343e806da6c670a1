class TemplateError(Exception):
    """Raised when a bundled template cannot be found or read."""
