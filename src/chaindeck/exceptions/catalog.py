"""Catalog-related exceptions.

- CatalogError: Base class for catalog loading errors
- CatalogFileNotFoundError: Catalog file does not exist
- CatalogFileInvalidError: Catalog file is not valid JSON
- EmptyCatalogError: Document decoded but yields zero chains
"""

from .base import ChainDeckError


class CatalogError(ChainDeckError):
    """Catalog could not be loaded."""
    pass


class CatalogFileNotFoundError(CatalogError):
    """Catalog file does not exist."""

    def __init__(self, file_path: str):
        super().__init__(
            user_message=f"Catalog file not found: {file_path}",
            recoverable=True,
            recovery_hint="Pass the path of an exported chain layout JSON file",
        )
        self.file_path = file_path


class CatalogFileInvalidError(CatalogError):
    """Catalog file is unreadable, not UTF-8, or not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize catalog file invalid error.

        Args:
            file_path: Path to the invalid catalog file
            parse_error: The parsing error message
        """
        super().__init__(
            user_message="Catalog file has invalid syntax",
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=f"Check the exported chain layout: {file_path}",
        )
        self.file_path = file_path
        self.parse_error = parse_error


class EmptyCatalogError(CatalogError):
    """The decoded document contains no chains."""

    def __init__(self, source: str | None = None):
        """
        Initialize empty catalog error.

        Args:
            source: Where the document came from (file path), if known
        """
        tech_msg = "No chains found in the catalog document"
        if source:
            tech_msg += f" ({source})"

        super().__init__(
            user_message="No chains found in the JSON file.",
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint="The document needs a non-empty top-level 'chains' mapping",
        )
        self.source = source
