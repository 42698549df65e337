"""Record graph construction from JSON:API documents."""

from .graph import GraphBuilder, collapse, linkage_identifiers
from .identity_map import IdentityMap

__all__ = ["GraphBuilder", "IdentityMap", "collapse", "linkage_identifiers"]
