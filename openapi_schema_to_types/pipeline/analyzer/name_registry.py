"""
Name registry for referenced schemas.

Records which referenced schemas need a named type declaration, keyed by
canonical path, and hands out one stable identifier per canonical path.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...utils import escape_identifier, snake_to_pascal_case


@dataclass
class RegistryEntry:
    """A registered named schema."""

    canonical_path: str = ""
    identifier: str = ""
    document_point: str = ""
    path_segments: list[str] = field(default_factory=list)


class NameRegistry:
    """Maps canonical schema paths to generated identifiers.

    Registration is idempotent and entries are never removed, so every
    reference to the same canonical path resolves to the same identifier
    for the whole run.
    """

    def __init__(self, pascal_case_names: bool = False):
        """
        Initialize the registry.

        Args:
            pascal_case_names: Convert preferred names to PascalCase
        """
        self.pascal_case_names = pascal_case_names
        self._entries: dict[str, RegistryEntry] = {}
        self._identifiers: dict[str, str] = {}  # identifier -> canonical path

    def __contains__(self, canonical_path: str) -> bool:
        return canonical_path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def ensure_named(
        self,
        canonical_path: str,
        preferred_name: str,
        namespace: str = "",
        document_point: str = "",
        path_segments: list[str] | None = None,
    ) -> str:
        """
        Get the identifier for a canonical path, registering it if needed.

        Args:
            canonical_path: Fully qualified schema location
            preferred_name: Name to use when it is still free (usually the leaf name)
            namespace: Prefix used when the preferred name is already taken
            document_point: Document holding the schema
            path_segments: Path of the schema inside its document

        Returns:
            The identifier for this canonical path
        """
        entry = self._entries.get(canonical_path)
        if entry is not None:
            return entry.identifier

        identifier = self._allocate_identifier(preferred_name, namespace)
        self._entries[canonical_path] = RegistryEntry(
            canonical_path=canonical_path,
            identifier=identifier,
            document_point=document_point,
            path_segments=list(path_segments or []),
        )
        self._identifiers[identifier] = canonical_path
        return identifier

    def name_for(self, canonical_path: str) -> str | None:
        """Get the identifier of an already registered path."""
        entry = self._entries.get(canonical_path)
        return entry.identifier if entry else None

    def entries(self) -> list[RegistryEntry]:
        """Registered entries in first-registration order."""
        return list(self._entries.values())

    def escape(self, name: str) -> str:
        """Turn a schema name into an identifier candidate."""
        if self.pascal_case_names:
            name = snake_to_pascal_case(name) or name
        return escape_identifier(name)

    def _allocate_identifier(self, preferred_name: str, namespace: str) -> str:
        """Pick an identifier no other canonical path uses."""
        base = self.escape(preferred_name)
        if base not in self._identifiers:
            return base

        if namespace:
            qualified = escape_identifier(f"{snake_to_pascal_case(namespace)}{base[0].upper()}{base[1:]}")
            if qualified not in self._identifiers:
                return qualified
            base = qualified

        suffix = 2
        while f"{base}{suffix}" in self._identifiers:
            suffix += 1
        return f"{base}{suffix}"
