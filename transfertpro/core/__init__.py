"""
Session-scoped helpers shared by the services.
"""

from transfertpro.core.cache import NodeCache
from transfertpro.core.nonce import NonceGenerator

__all__ = ["NodeCache", "NonceGenerator"]
