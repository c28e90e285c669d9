"""
Source logging utilities with Protocol + Mixin pattern.

Provides trait-like logging functionality for link sources.
Each source defines its kind and context format, the mixin provides
consistent log_debug/log_warning methods.

Usage:
    class TemplateSource(BaseLinkSource):
        SOURCE_KIND = SourceKind.TEMPLATE

        def _log_context(self) -> str:
            return f"source={self.source_name}"

    source.log_warning("Fetch failed")  # [template:source=nowcoder.com] Fetch failed
"""

import logging
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from sources.enums import SourceKind

logger = logging.getLogger("sources")


class SourceLoggerProtocol(Protocol):
    """
    Protocol defining what classes using SourceLoggerMixin must provide.

    This enables type checking - mypy will error if a class uses the mixin
    but doesn't define SOURCE_KIND or _log_context().
    """
    SOURCE_KIND: "SourceKind"

    def _log_context(self) -> str:
        """Return context string like 'source=nowcoder.com'."""
        ...


class SourceLoggerMixin:
    """
    Mixin providing log_debug/log_warning methods.

    Log format: [SourceKind:context] message

    Examples:
    - [template:source=nowcoder.com] Fetched 3 links
    - [partner_api:source=moka] Token request failed: ...
    """

    def _log_prefix(self: SourceLoggerProtocol) -> str:
        """Build log prefix from source kind and context."""
        return f"[{self.SOURCE_KIND.value}:{self._log_context()}]"

    def log_debug(self: SourceLoggerProtocol, message: str) -> None:
        logger.debug(f"{self._log_prefix()} {message}")

    def log_warning(self: SourceLoggerProtocol, message: str) -> None:
        """Log warning message with source prefix."""
        logger.warning(f"{self._log_prefix()} {message}")
