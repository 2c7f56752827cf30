"""Exceptions for nix8820 with contextual information."""

from typing import Any, Dict, Optional


class Nix8820Error(Exception):
    """Base error for nix8820 with contextual information."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize a nix8820 error.

        Args:
            message: Error message
            context: Optional context information (path, offset, label, variant, etc.)
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Get string representation with context."""
        base_msg = super().__str__()
        if self.context:
            context_items = []
            for key, value in self.context.items():
                if isinstance(value, str) and len(value) > 50:
                    # Truncate long values
                    value = value[:47] + "..."
                context_items.append(f"{key}={value}")
            context_str = ", ".join(context_items)
            return f"{base_msg} (Context: {context_str})"
        return base_msg

    def __repr__(self) -> str:
        """Get repr with context details."""
        base_repr = super().__repr__()
        if self.context:
            return f"{base_repr} (context={self.context!r})"
        return base_repr

    def add_context(self, key: str, value: Any) -> None:
        """
        Add context information to the exception.

        Args:
            key: Context key
            value: Context value
        """
        self.context[key] = value

    def get_context(self, key: str, default: Any = None) -> Any:
        """
        Get context information from the exception.

        Args:
            key: Context key
            default: Default value if key not found

        Returns:
            Context value or default
        """
        return self.context.get(key, default)


class ParseError(Nix8820Error):
    """Misuse of the byte reader (for example a second pending pushback)."""

    pass


class ConfigurationError(Nix8820Error):
    """Unknown decoder variant or invalid configuration value."""

    pass


class DiskImageError(Nix8820Error):
    """Disk image could not be opened or positioned."""

    pass


class LabelError(Nix8820Error):
    """An expected ECMA-58 label was not found where it should be."""

    pass


class DirectoryError(Nix8820Error):
    """Directory could not be located, or a file lookup failed."""

    pass
