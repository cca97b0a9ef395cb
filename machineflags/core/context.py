"""Execution context for testability."""

import os


class Context:
    """
    Wraps environment access for testability.

    In production: reads the process environment
    In tests: can be replaced with MockContext
    """

    def get_env(self, key: str, default: str | None = None) -> str | None:
        """Get environment variable."""
        return os.environ.get(key, default)
