from __future__ import annotations

from typing import Optional, Protocol


class RegistryMetaRepository(Protocol):
    """Registry-wide metadata: the admin identity, fixed on first start."""

    def get_admin(self) -> Optional[str]:
        raise NotImplementedError

    def set_admin(self, identity: str) -> None:
        """Record the admin once; raises ``RegistryConfigurationError`` if one is already stored."""

        raise NotImplementedError
