"""
Asset base class for immutable authored data.

Assets are authored offline (character packs, dialogue scenes) and are
read-only at playback time, so one instance can be shared by any number
of playback sessions. Runtime state never lives on an asset.

Usage:
    @register_asset
    class CharacterPack(Asset):
        id: str
        expression_map: dict[str, str] = {}
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Asset(BaseModel):
    """
    Base class for all authored data models.

    Uses Pydantic for:
    - Validation of authored values at construction
    - JSON-friendly field types
    - Immutability (frozen models)
    """

    model_config = ConfigDict(
        # Allow arbitrary types (for references)
        arbitrary_types_allowed=True,
        # Authored data is immutable once loaded
        frozen=True,
        # Typos in authored data are errors
        extra='forbid',
    )

    # Asset type name (used by loaders and debug output)
    _type_name: ClassVar[str] = ""

    @classmethod
    def get_type_name(cls) -> str:
        """Get the asset type name."""
        return cls._type_name or cls.__name__


# Registry of asset types by name
_asset_registry: dict[str, type[Asset]] = {}


def register_asset(cls: type[Asset]) -> type[Asset]:
    """Decorator to register an asset type under its type name."""
    _asset_registry[cls.get_type_name()] = cls
    return cls


def get_asset_type(type_name: str) -> type[Asset] | None:
    """Get asset class by type name."""
    return _asset_registry.get(type_name)
