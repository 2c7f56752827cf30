"""
Centralized error raising for disk image operations.

Logs the failure once at the point it is detected and raises the requested
exception type with optional context and chaining.
"""

import logging
from typing import Any, Dict, NoReturn, Optional, Type

from ..exceptions import Nix8820Error

logger = logging.getLogger(__name__)


def raise_disk_error(
    exc_type: Type[Nix8820Error],
    message: str,
    context: Optional[Dict[str, Any]] = None,
    exc: Optional[Exception] = None,
) -> NoReturn:
    """Raise a disk error with optional wrapped exception and context."""
    if exc:
        logger.error(f"{message}: {exc}", exc_info=True)
        raise exc_type(
            f"{message}: {exc}", context=context, original_exception=exc
        ) from exc
    logger.error(message if not context else f"{message} (Context: {context})")
    raise exc_type(message, context=context)
