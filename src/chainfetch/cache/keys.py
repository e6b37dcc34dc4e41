"""Cache key builders for consistent key formatting."""

from chainfetch.core.keyset import KeysetHash


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    PREFIX = "chainfetch"

    @classmethod
    def keyset(cls, ks_hash: KeysetHash) -> str:
        """Key for keyset bytes by content hash."""
        return f"{cls.PREFIX}:keyset:{ks_hash.value.hex()}"
