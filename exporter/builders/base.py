"""
Base class for the per-run named registries that become top-level
document sections (text styles, layouts, component styles).
"""

import logging
from copy import deepcopy
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class NamedRegistry:
    """
    Name → value registry where the first registration wins.

    Names are unique for the lifetime of one export run, so a second
    registration under the same name is ignored.
    """

    #: Document key this registry is serialized under
    document_key: str = ""

    def __init__(self):
        self._items: Dict[str, Any] = {}

    def register(self, name: str, values: Any) -> bool:
        """
        Register a value under `name`.

        Returns:
            True if stored, False if the name was already taken
        """
        if name in self._items:
            return False
        self._items[name] = deepcopy(values)
        return True

    def get(self, name: str) -> Optional[Any]:
        value = self._items.get(name)
        return deepcopy(value) if value is not None else None

    def build(self) -> Dict[str, Any]:
        """All registered values, in registration order."""
        return deepcopy(self._items)

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)
