"""
Errors raised by the molecule model.

NotFound errors mean the caller holds an id the document no longer knows
about; Collision errors mean an id was inserted twice. Both point at a
logic inconsistency and are never retried.
"""


class MoleculeError(Exception):
    """Base class for all model errors."""


class NotFoundError(MoleculeError, LookupError):
    """A referenced id is absent."""


class AtomMissingError(NotFoundError):
    def __init__(self, atom_id):
        self.atom_id = atom_id
        super().__init__(f"atom not found: {atom_id}")


class BondMissingError(NotFoundError):
    def __init__(self, bond_id):
        self.bond_id = bond_id
        super().__init__(f"bond not found: {bond_id}")


class MoleculeMissingError(NotFoundError):
    def __init__(self, molecule_id):
        self.molecule_id = molecule_id
        super().__init__(f"molecule not found: {molecule_id}")


class CollisionError(MoleculeError):
    """An id is already in use."""


class AtomCollisionError(CollisionError):
    def __init__(self, atom_id):
        self.atom_id = atom_id
        super().__init__(f"atom id collision: {atom_id}")


class BondCollisionError(CollisionError):
    def __init__(self, bond_id):
        self.bond_id = bond_id
        super().__init__(f"bond id collision: {bond_id}")


class MoleculeCollisionError(CollisionError):
    def __init__(self, molecule_id):
        self.molecule_id = molecule_id
        super().__init__(f"molecule id collision: {molecule_id}")


class InvalidGeometryError(MoleculeError, ValueError):
    """Degenerate geometry: a non-invertible transform or a zero-length direction."""
