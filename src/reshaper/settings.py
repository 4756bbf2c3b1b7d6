"""
Reshape settings model.

Pydantic model for validating engine options, passed directly to
reshape() or loaded from a YAML/JSON settings file by the CLI.

Example YAML:
    ```yaml
    key_hints: true
    sticky_keys: true
    max_depth: 4
    ```
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ReshapeSettings(BaseModel):
    """
    Engine options.

    Attributes:
        key_hints: Use object template key names as preferred property names
                   (``{"age": ["Number"]}`` prefers a property called ``age``).
        sticky_keys: Once the first element of an array picks a property,
                     prefer the same property name for the remaining elements.
        max_depth: Deepest level the searcher descends below a candidate
                   root. None means unbounded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    key_hints: bool = Field(True, description="Schema key names act as hints")
    sticky_keys: bool = Field(
        True, description="Fix keys chosen by the first array element"
    )
    max_depth: Optional[int] = Field(
        None, ge=0, description="Maximum search depth (None = unbounded)"
    )

    @classmethod
    def default(cls) -> "ReshapeSettings":
        """Create default settings."""
        return cls()

    @classmethod
    def from_yaml(cls, config: Optional[Dict[str, Any]]) -> "ReshapeSettings":
        """
        Parse settings from a configuration dictionary.

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        if not config:
            return cls.default()
        return cls(**config)


def coerce_settings(
    settings: Union["ReshapeSettings", Dict[str, Any], None]
) -> ReshapeSettings:
    """Accept a settings model, a plain dict, or None."""
    if settings is None:
        return ReshapeSettings.default()
    if isinstance(settings, ReshapeSettings):
        return settings
    return ReshapeSettings.from_yaml(dict(settings))
