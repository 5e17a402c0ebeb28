"""
Vocabulary registry for structdata.

The registry answers the only questions the engine asks about schema.org:
is a type known, what is its parent, is a property valid for a type and
what does the property expect. Types and properties are loaded from a
YAML file shaped like:

    Article:
      extends: CreativeWork
      properties:
        articleBody: [Text]

Property lookups walk the parent chain up to the root type (Thing).
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from ..models.directives import PropertyKind
from .log import LOG


ROOT_TYPE = "Thing"

# First expected types rendered as machine-readable <meta> output
META_TYPES = {"Date", "DateTime"}

# Properties always rendered as <meta> regardless of their expected type
META_PROPERTIES = {"interactionCount"}

# Primitive data types; anything else is a nested vocabulary type
TEXT_TYPES = {"Text", "URL", "Number", "Integer", "Float", "Boolean", "Time"}


class VocabularyError(Exception):
    """Raised when a vocabulary file cannot be loaded or is inconsistent"""
    pass


class VocabularyRegistry:
    """
    Lookup table of vocabulary types and their properties.

    Attributes:
        types: {type_name: {"extends": parent_or_None, "properties": {name: [expected, ...]}}}
        root_type: Name of the root type, which has no parent
    """

    def __init__(self, types: Dict[str, Any], root_type: str = ROOT_TYPE):
        """
        Build a registry from already-parsed type definitions.

        Args:
            types: Mapping of type name to its definition
            root_type: Type used when a lookup names an unknown type

        Raises:
            VocabularyError: If the root type is missing or a type extends
                             an unknown parent
        """
        self.root_type = root_type
        self.types: Dict[str, Dict[str, Any]] = {}

        for name, definition in types.items():
            definition = definition or {}
            self.types[name] = {
                "extends": definition.get("extends"),
                "properties": dict(definition.get("properties") or {}),
            }

        self._types_validate()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "VocabularyRegistry":
        """
        Load a registry from a YAML vocabulary file.

        Raises:
            VocabularyError: If the file is missing, unparseable or inconsistent
        """
        vocabulary_path = Path(path)
        if not vocabulary_path.exists():
            raise VocabularyError(f"Vocabulary file not found: {vocabulary_path}")

        try:
            with open(vocabulary_path, "r", encoding="utf-8") as f:
                types: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise VocabularyError(f"Failed to parse {vocabulary_path.name}: {e}")

        if not isinstance(types, dict):
            raise VocabularyError(f"{vocabulary_path.name} must map type names to definitions")

        LOG(f"Loaded {len(types)} vocabulary types from {vocabulary_path}", level=2)
        return cls(types)

    def _types_validate(self) -> None:
        """Check the root type exists and every parent is a known type"""
        if self.root_type not in self.types:
            raise VocabularyError(f"Root type '{self.root_type}' missing from vocabulary")

        for name, definition in self.types.items():
            parent = definition["extends"]
            if name == self.root_type:
                continue
            if parent is None:
                raise VocabularyError(f"Type '{name}' has no parent type")
            if parent not in self.types:
                raise VocabularyError(f"Type '{name}' extends unknown type '{parent}'")

    def type_has(self, name: Optional[str]) -> bool:
        """Check if a type name is known"""
        return name is not None and name in self.types

    def type_resolve(self, name: Optional[str]) -> str:
        """Return name when it is a known type, otherwise the root type"""
        if self.type_has(name):
            return name  # type: ignore[return-value]
        if name is not None:
            LOG(f"Unknown type '{name}', falling back to {self.root_type}", level=3)
        return self.root_type

    def parent_get(self, name: str) -> Optional[str]:
        """Parent of a type, None for the root or unknown types"""
        if not self.type_has(name):
            return None
        return self.types[name]["extends"]

    def lineage_get(self, name: str) -> List[str]:
        """
        List a type followed by its ancestors up to the root.

        Example:
            >>> vocabulary_default().lineage_get('Article')
            ['Article', 'CreativeWork', 'Thing']
        """
        lineage: List[str] = []
        current: Optional[str] = name
        while current is not None and self.type_has(current) and current not in lineage:
            lineage.append(current)
            current = self.types[current]["extends"]
        return lineage

    def expectedTypes_get(self, type_name: str, property_name: Optional[str]) -> List[str]:
        """
        Expected types of a property, searching the type and its ancestors.

        Returns:
            Expected type names in preference order, or [] when the property
            is not valid for the type
        """
        if not property_name:
            return []
        for name in self.lineage_get(type_name):
            properties = self.types[name]["properties"]
            if property_name in properties:
                return list(properties[property_name] or [])
        return []

    def property_has(self, type_name: Optional[str], property_name: Optional[str]) -> bool:
        """Check if a property is valid for a type (inherited properties count)"""
        if not type_name or not property_name:
            return False
        for name in self.lineage_get(type_name):
            if property_name in self.types[name]["properties"]:
                return True
        return False

    def propertyKind_get(self, type_name: str, property_name: str) -> PropertyKind:
        """
        Decide how a property is rendered from its first expected type.

        Dates (and interactionCount) are machine-readable meta values,
        primitive data types are plain text, anything else is a nested item.
        """
        if property_name in META_PROPERTIES:
            return PropertyKind.META

        expected = self.expectedTypes_get(type_name, property_name)
        if not expected:
            return PropertyKind.TEXT

        first = expected[0]
        if first in META_TYPES:
            return PropertyKind.META
        if first in TEXT_TYPES:
            return PropertyKind.TEXT
        return PropertyKind.NESTED

    def nestedType_get(self, type_name: str, property_name: str) -> Optional[str]:
        """First expected type of a nested property, None otherwise"""
        if self.propertyKind_get(type_name, property_name) is not PropertyKind.NESTED:
            return None
        return self.expectedTypes_get(type_name, property_name)[0]

    def types_list(self) -> List[str]:
        """All known type names, sorted"""
        return sorted(self.types)

    def __repr__(self) -> str:
        return f"VocabularyRegistry(types={len(self.types)}, root='{self.root_type}')"


_default_vocabulary: Optional[VocabularyRegistry] = None


def vocabulary_default() -> VocabularyRegistry:
    """
    Registry loaded from the configured (or bundled) vocabulary file.

    Loaded once and shared; the registry is read-only after construction.
    """
    global _default_vocabulary
    if _default_vocabulary is None:
        from ..config import appsettings
        _default_vocabulary = VocabularyRegistry.from_file(appsettings.vocabularyPath_get())
    return _default_vocabulary
