"""
Opaque identifiers for atoms, bonds and molecules.

Each id wraps a random 128-bit UUID. No registry is kept: the chance of
two draws colliding is negligible, and ids are never reused.
"""

from dataclasses import dataclass, field
import uuid


@dataclass(frozen=True, order=True)
class AtomId:
    """Identifier of an atom within its molecule."""
    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return f"atom-{self.value.hex[:8]}"


@dataclass(frozen=True, order=True)
class BondId:
    """Identifier of a bond within its molecule."""
    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return f"bond-{self.value.hex[:8]}"


@dataclass(frozen=True, order=True)
class MoleculeId:
    """Identifier of a molecule within the document."""
    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return f"molecule-{self.value.hex[:8]}"
