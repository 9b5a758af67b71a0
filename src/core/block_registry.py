"""Registry of block mappers, keyed by configuration block name."""

import logging

from .protocols import BlockMapper

logger = logging.getLogger(__name__)


class BlockMapperRegistry:
    """
    Registry for managing available block mappers.

    Maps block names (e.g. 'site_config') to the mapper instance that
    expands and flattens that block.
    """

    def __init__(self):
        """Initialize the block mapper registry."""
        self._mappers: dict[str, BlockMapper] = {}
        self._logger = logger.getChild(self.__class__.__name__)

    def register_mapper(self, block_name: str, mapper: BlockMapper) -> None:
        """
        Register a mapper for a block name.

        Args:
            block_name: The block identifier (e.g., 'site_config')
            mapper: The mapper instance to register

        Raises:
            ValueError: If block_name is empty or mapper is None
        """
        if not block_name or not block_name.strip():
            raise ValueError("Block name cannot be empty")

        if mapper is None:
            raise ValueError("Mapper cannot be None")

        block_name = block_name.strip().lower()

        if block_name in self._mappers:
            self._logger.warning(
                f"Overwriting existing mapper registration for block '{block_name}'"
            )

        self._mappers[block_name] = mapper
        self._logger.info(
            f"Registered mapper '{mapper.__class__.__name__}' for block '{block_name}'"
        )

    def get_mapper(self, block_name: str) -> BlockMapper:
        """
        Get the mapper registered for a block name.

        Args:
            block_name: The block name to look up

        Returns:
            The registered mapper

        Raises:
            ValueError: If the block name is not registered
        """
        if not block_name:
            raise ValueError("Block name cannot be empty")

        block_name = block_name.strip().lower()

        if block_name not in self._mappers:
            available = self.get_available_blocks()
            available_str = ", ".join(available) if available else "none"
            raise ValueError(
                f"Unknown block '{block_name}'. Available blocks: {available_str}"
            )

        return self._mappers[block_name]

    def get_available_blocks(self) -> list[str]:
        """Return the sorted names of all registered blocks."""
        return sorted(self._mappers.keys())

    def is_block_available(self, block_name: str) -> bool:
        """Check if a mapper is registered for the block name."""
        if not block_name:
            return False

        return block_name.strip().lower() in self._mappers


# Global block mapper registry instance
_global_registry = BlockMapperRegistry()


def get_global_registry() -> BlockMapperRegistry:
    """Get the global block mapper registry instance."""
    return _global_registry


def register_builtin_mappers() -> None:
    """Register all built-in block mappers with the global registry."""
    # Import here to avoid circular imports
    from src.plugins.azurerm.mappers.app_service_site_config import (
        AppServiceSiteConfigMapper,
    )

    registry = get_global_registry()

    # Only register if not already registered to avoid duplicate warnings
    if not registry.is_block_available(AppServiceSiteConfigMapper.block_name):
        registry.register_mapper(
            AppServiceSiteConfigMapper.block_name, AppServiceSiteConfigMapper()
        )
