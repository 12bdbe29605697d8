"""Base exception for appblock.

Domain modules define their own subclasses next to the code that raises
them; the CLI catches this base to turn any of them into an error exit.
"""


class AppBlockError(Exception):
    """Base exception for all appblock errors."""
