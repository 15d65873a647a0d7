"""
Hierarchical attribute store used to archive value objects.

A DataAdaptor is one node of a tree: it has a name, string-valued attributes
and ordered child nodes. Typed getters parse the stored string on the way out.
MemoryDataAdaptor keeps the whole tree in memory and converts to / from nested
plain dicts (JSON-compatible), which is how callers persist it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class DataFormatError(ValueError):
    """Malformed data found while reading an archive or parsing a value."""


class DataAdaptor(ABC):
    """Node contract consumed by archivable objects (save / load)."""

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def has_attribute(self, key: str) -> bool:
        ...

    @abstractmethod
    def attributes(self) -> List[str]:
        ...

    @abstractmethod
    def set_value(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def string_value(self, key: str) -> str:
        ...

    @abstractmethod
    def create_child(self, label: str) -> "DataAdaptor":
        ...

    @abstractmethod
    def child_adaptors(self, label: Optional[str] = None) -> List["DataAdaptor"]:
        ...

    def child_adaptor(self, label: str) -> Optional["DataAdaptor"]:
        children = self.child_adaptors(label)
        return children[0] if children else None

    def double_value(self, key: str) -> float:
        raw = self.string_value(key)
        try:
            return float(raw)
        except ValueError as e:
            raise DataFormatError(f"Attribute {key!r} is not a number: {raw!r}") from e

    def int_value(self, key: str) -> int:
        raw = self.string_value(key)
        try:
            return int(raw)
        except ValueError as e:
            raise DataFormatError(f"Attribute {key!r} is not an integer: {raw!r}") from e

    def boolean_value(self, key: str) -> bool:
        raw = self.string_value(key).strip().lower()
        if raw in ("true", "1", "yes"):
            return True
        if raw in ("false", "0", "no"):
            return False
        raise DataFormatError(f"Attribute {key!r} is not a boolean: {raw!r}")


class MemoryDataAdaptor(DataAdaptor):
    def __init__(self, label: str = "root"):
        self._name = label
        self._attrs: Dict[str, str] = {}
        self._children: List[MemoryDataAdaptor] = []

    def name(self) -> str:
        return self._name

    def has_attribute(self, key: str) -> bool:
        return key in self._attrs

    def attributes(self) -> List[str]:
        return list(self._attrs)

    def set_value(self, key: str, value: Any) -> None:
        # stored as text, like an XML attribute
        if isinstance(value, bool):
            text = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            text = " ".join(str(v) for v in value)
        else:
            text = str(value)
        self._attrs[key] = text

    def string_value(self, key: str) -> str:
        try:
            return self._attrs[key]
        except KeyError:
            raise KeyError(f"Node {self._name!r} has no attribute {key!r}") from None

    def create_child(self, label: str) -> "MemoryDataAdaptor":
        child = MemoryDataAdaptor(label)
        self._children.append(child)
        return child

    def child_adaptors(self, label: Optional[str] = None) -> List["MemoryDataAdaptor"]:
        if label is None:
            return list(self._children)
        return [c for c in self._children if c._name == label]

    # ---------------------------
    # dict conversion
    # ---------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "attributes": dict(self._attrs),
            "children": [c.to_dict() for c in self._children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryDataAdaptor":
        try:
            node = cls(str(data["name"]))
            attrs = data.get("attributes", {})
            children = data.get("children", [])
        except (KeyError, TypeError, AttributeError) as e:
            raise DataFormatError(f"Malformed adaptor node: {data!r}") from e
        if not isinstance(attrs, dict) or not isinstance(children, list):
            raise DataFormatError(f"Malformed adaptor node: {data!r}")
        for k, v in attrs.items():
            node._attrs[str(k)] = str(v)
        for child in children:
            node._children.append(cls.from_dict(child))
        logger.debug("Loaded node %s (%d attrs, %d children)", node._name, len(attrs), len(children))
        return node

    def __repr__(self):
        return f"MemoryDataAdaptor({self._name!r}, attrs={self._attrs!r}, children={len(self._children)})"
