"""Runtime settings for the resolution engine.

Values come from code defaults, overridden by ``TESSERA_*`` environment
variables (complex values such as ``TESSERA_SKIP_NAMESPACES`` are given as JSON).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """Settings consulted by the member resolver and annotation locator.

    Attributes:
        search_inherited_methods: If True, method resolution also considers public
            methods declared by ancestors, not only those declared by the target's
            own class.
        skip_namespaces: Module prefixes excluded from annotation lookup when the
            caller does not pass an explicit exclusion list.
    """

    model_config = SettingsConfigDict(env_prefix="TESSERA_", frozen=True)

    search_inherited_methods: bool = False
    skip_namespaces: tuple[str, ...] = Field(
        default=("builtins", "typing", "abc", "collections")
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
