"""
Issuer detection by content sniffing.
"""
from typing import List, Optional
import logging

from .templates import default_config
from ..models.schema import IssuerMatch, IssuerRegistry

logger = logging.getLogger(__name__)


class IssuerDetector:
    """Identifies which issuer produced a statement."""

    def __init__(self, registry: Optional[IssuerRegistry] = None):
        self.registry = registry if registry is not None else default_config().registry

    def detect(self, text: str) -> IssuerMatch:
        """
        Find the first registered issuer whose key appears in the text.

        Registry order decides between several issuers mentioned in the same
        document.

        Args:
            text: Full document text

        Returns:
            IssuerMatch for the issuer, or the unknown-issuer match
        """
        haystack = text.lower()

        for entry in self.registry:
            if entry.key in haystack:
                logger.info(f"Detected issuer: {entry.display_name}")
                return IssuerMatch(
                    issuer=entry.display_name,
                    asset_ref=entry.asset_ref,
                    key=entry.key
                )

        logger.warning("No known issuer found in document text")
        unknown = self.registry.unknown
        return IssuerMatch(issuer=unknown.display_name, asset_ref=unknown.asset_ref)

    def list_issuers(self) -> List[str]:
        """List the display names of all registered issuers."""
        return [entry.display_name for entry in self.registry]


def identify_issuer(text: str, registry: Optional[IssuerRegistry] = None) -> IssuerMatch:
    """
    Convenience function to identify the issuer of a statement.

    Args:
        text: Full document text
        registry: Issuer registry, defaults to the bundled one

    Returns:
        IssuerMatch
    """
    return IssuerDetector(registry).detect(text)
