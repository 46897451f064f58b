"""Library settings and the unknown map key policy.

Settings come from environment variables (prefix RIGHTTYPES_) or a .env file.
The unknown-key policy can also be overridden for a block of code with
unknown_keys_policy(); the override lives in a ContextVar, so every thread
and asyncio task sees its own value.
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from enum import StrEnum

from pydantic_settings import BaseSettings, SettingsConfigDict


class KeyPolicy(StrEnum):
    """What a map schema does with keys its specification doesn't mention."""

    ALLOW = "allow"
    DISALLOW = "disallow"


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Pydantic Settings reads env vars matching field names with the
    RIGHTTYPES_ prefix (case-insensitive), e.g. RIGHTTYPES_UNKNOWN_KEYS=disallow.
    """

    # Default policy for map keys missing from a map specification.
    # "allow" passes them through unchecked, "disallow" reports each one.
    unknown_keys: KeyPolicy = KeyPolicy.ALLOW

    model_config = SettingsConfigDict(
        env_prefix="RIGHTTYPES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()

# Scoped override set by unknown_keys_policy(); None means "use settings"
_unknown_keys_override: ContextVar[KeyPolicy | None] = ContextVar(
    "righttypes_unknown_keys", default=None
)


def current_unknown_keys_policy() -> KeyPolicy:
    """Return the innermost scoped override, falling back to settings."""
    override = _unknown_keys_override.get()
    if override is not None:
        return override
    return settings.unknown_keys


@contextmanager
def unknown_keys_policy(policy: KeyPolicy | str) -> Iterator[KeyPolicy]:
    """Use ``policy`` for every map schema built inside the ``with`` block.

    The policy is captured when the schema is built, not when it is applied::

        with unknown_keys_policy(KeyPolicy.DISALLOW):
            Person = T({"first": str, Opt("middle"): str, "last": str})

        Person({"first": "Charles", "middel": "M", "last": "Brown"})  # error at "middel"
    """
    resolved = KeyPolicy(policy)
    token = _unknown_keys_override.set(resolved)
    try:
        yield resolved
    finally:
        _unknown_keys_override.reset(token)


def disallow_unexpected_map_keys() -> AbstractContextManager[KeyPolicy]:
    """Shorthand for ``unknown_keys_policy(KeyPolicy.DISALLOW)``."""
    return unknown_keys_policy(KeyPolicy.DISALLOW)
