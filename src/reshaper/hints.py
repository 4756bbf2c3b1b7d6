"""
Hint resolution.

Hints are property names that bias which source field a type leaf picks.
They arrive in one of three forms:

    "lastName"                      one name for every leaf position
    ["lastName", "height"]          a pool consumed in schema key order
    {"one": "c"}                    names bound to specific schema keys

A pool hint is removed once it selects a leaf, so a later schema key cannot
use it again. Keyed hints and schema key names are never consumed.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .exceptions import HintError

logger = logging.getLogger(__name__)


class HintPool:
    """
    Mutable pool of caller hints for one reshape call.

    Attributes:
        names: Ordered pool hints still available.
        keyed: Schema key to property name bindings.
    """

    def __init__(
        self,
        names: Optional[Iterable[str]] = None,
        keyed: Optional[Dict[str, str]] = None,
    ):
        self.names: List[str] = list(names or ())
        self.keyed: Dict[str, str] = dict(keyed or {})

    @classmethod
    def from_raw(cls, hints: Any) -> "HintPool":
        """
        Build a pool from the caller's hint argument.

        Raises:
            HintError: If hints are not None, a string, a sequence of strings
                       or a mapping of strings to strings.
        """
        if hints is None:
            return cls()
        if isinstance(hints, HintPool):
            return hints.copy()
        if isinstance(hints, str):
            return cls(names=[hints])
        if isinstance(hints, Mapping):
            for key, name in hints.items():
                if not isinstance(key, str) or not isinstance(name, str):
                    raise HintError(
                        f"Keyed hints must map strings to strings, got {key!r}: {name!r}"
                    )
            return cls(keyed=dict(hints))
        if isinstance(hints, (list, tuple)):
            for name in hints:
                if not isinstance(name, str):
                    raise HintError(f"Hint names must be strings, got {name!r}")
            return cls(names=hints)
        raise HintError(f"Unsupported hints of type {type(hints).__name__}")

    def copy(self) -> "HintPool":
        return copy.deepcopy(self)

    def preferred_for(
        self,
        key: Optional[str],
        use_key_name: bool = True,
    ) -> List[str]:
        """
        Names a schema key contributes ahead of the pool: its keyed hint,
        then the key name itself.
        """
        if key is None:
            return []
        names = []
        if key in self.keyed:
            names.append(self.keyed[key])
        if use_key_name and key not in names:
            names.append(key)
        return names

    def candidates(self, preferred: Sequence[str], sticky: Sequence[str] = ()) -> List[str]:
        """
        Full ordered list of property names to try for a leaf position.

        Order: preferred (keyed hint, key name), pool, sticky keys.
        """
        ordered: List[str] = []
        for name in list(preferred) + self.names + list(sticky):
            if name not in ordered:
                ordered.append(name)
        return ordered

    def consume(self, name: str) -> bool:
        """Remove a pool hint. Returns False if it was not in the pool."""
        if name in self.names:
            self.names.remove(name)
            logger.debug(f"Consumed hint '{name}'")
            return True
        return False

    def __bool__(self) -> bool:
        return bool(self.names or self.keyed)

    def __repr__(self) -> str:
        return f"HintPool(names={self.names!r}, keyed={self.keyed!r})"
