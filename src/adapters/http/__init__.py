"""HTTP adapters - Remote verification service clients."""

from .campus import CampusAuthClient, classify_failure, extract_message

__all__ = ["CampusAuthClient", "classify_failure", "extract_message"]
