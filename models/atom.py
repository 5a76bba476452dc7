"""
Atom and label models.

An atom is a labelled point stored relative to its molecule's origin.
Labels are split into tokens (an uppercase letter starts a new token,
digits become subscripts) and laid out from the atom outward along the
label direction, so "CH3" reads "CH₃" to the right and "H₃C" to the left.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable

from .constants import (
    ATOM_PADDING, GLYPH_HEIGHT, GLYPH_WIDTH, LABEL_BLOCK_THRESHOLD,
    SUBSCRIPT_GLYPH_WIDTH, TOKEN_SEPARATION,
)
from .geometry import Bounds, Point, Rectangle, Vector


SUBSCRIPT_DIGITS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")
_SUBSCRIPTS = set("₀₁₂₃₄₅₆₇₈₉")


class Direction(Enum):
    """Side of the atom that the label grows towards."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


# Preference order when choosing a free side for a label
DIRECTION_PREFERENCE = (Direction.RIGHT, Direction.LEFT, Direction.UP, Direction.DOWN)


def choose_label_direction(unit_vectors: Iterable[Vector]) -> Direction:
    """
    Pick the first side not blocked by a bond.

    A side is blocked when some bond leaves the atom with a component of
    more than 0.1 towards it. Falls back to RIGHT when every side is blocked.
    """
    blocked = set()
    for unit in unit_vectors:
        if unit.x > LABEL_BLOCK_THRESHOLD:
            blocked.add(Direction.RIGHT)
        elif unit.x < -LABEL_BLOCK_THRESHOLD:
            blocked.add(Direction.LEFT)
        if unit.y > LABEL_BLOCK_THRESHOLD:
            blocked.add(Direction.DOWN)
        elif unit.y < -LABEL_BLOCK_THRESHOLD:
            blocked.add(Direction.UP)

    for direction in DIRECTION_PREFERENCE:
        if direction not in blocked:
            return direction
    return Direction.RIGHT


@dataclass(frozen=True)
class Token:
    """A run of label text drawn as one unit, centred on the origin."""
    text: str

    @property
    def bounds(self) -> Rectangle:
        width = sum(
            SUBSCRIPT_GLYPH_WIDTH if char in _SUBSCRIPTS else GLYPH_WIDTH
            for char in self.text
        )
        return Rectangle(-width / 2.0, -GLYPH_HEIGHT / 2.0, width, GLYPH_HEIGHT)


def tokenize(text: str) -> list[Token]:
    tokens = []
    current = ""
    for char in text:
        if char.isupper():
            if current:
                tokens.append(Token(current))
            current = char
        elif char.isascii() and char.isdigit():
            current += char.translate(SUBSCRIPT_DIGITS)
        else:
            current += char
    if current:
        tokens.append(Token(current))
    return tokens


@dataclass
class Label:
    """Atom label text with its token layout."""
    text: str = ""
    direction: Direction = Direction.RIGHT
    tokens: list[Token] = field(init=False, default_factory=list)
    placements: list[Rectangle] = field(init=False, default_factory=list)
    bounds: Rectangle = field(init=False, default_factory=Rectangle)

    def __post_init__(self):
        self.tokens = tokenize(self.text)
        self._layout()

    def is_empty(self) -> bool:
        return not self.tokens

    def update_direction(self, direction: Direction) -> None:
        if direction != self.direction:
            self.direction = direction
            self._layout()

    def _layout(self):
        """Place each token next to the ones before it, along the direction."""
        if not self.tokens:
            self.placements = []
            self.bounds = Rectangle()
            return

        label_bounds = self.tokens[0].bounds
        placements = [label_bounds]
        for token in self.tokens[1:]:
            b = token.bounds
            if self.direction == Direction.RIGHT:
                x, y = label_bounds.right + TOKEN_SEPARATION, b.y
            elif self.direction == Direction.LEFT:
                x, y = label_bounds.x - b.width - TOKEN_SEPARATION, b.y
            elif self.direction == Direction.DOWN:
                x, y = b.x, label_bounds.bottom + TOKEN_SEPARATION
            else:
                x, y = b.x, label_bounds.y - b.height - TOKEN_SEPARATION
            placed = Rectangle(x, y, b.width, b.height)
            placements.append(placed)
            label_bounds = label_bounds.union(placed)

        self.placements = placements
        self.bounds = label_bounds

    def layout(self) -> list[tuple[Token, Rectangle]]:
        """Tokens paired with the rectangle each one occupies, atom-relative."""
        return list(zip(self.tokens, self.placements))


@dataclass
class Atom:
    """A labelled point, positioned relative to its molecule's origin."""
    label: Label = field(default_factory=Label)
    position: Point = field(default_factory=Point)

    @classmethod
    def create(cls, text: str, position: Point,
               direction: Direction = Direction.RIGHT) -> "Atom":
        return cls(label=Label(text, direction), position=position)

    @property
    def text(self) -> str:
        return self.label.text

    @property
    def direction(self) -> Direction:
        return self.label.direction

    def bounds(self) -> Bounds:
        """Padded label box in molecule-local coordinates."""
        box = Bounds.from_rectangle(self.label.bounds.expand(ATOM_PADDING))
        return box + self.position.to_vector()

    def rename(self, text: str) -> None:
        self.label = Label(text, self.label.direction)

    def update_label_direction(self, direction: Direction) -> None:
        self.label.update_direction(direction)

    def translate(self, translation: Vector) -> None:
        self.position = self.position + translation

    def bond_start(self, end: Point) -> Point:
        """
        Where a bond towards `end` should start, in molecule-local coordinates.

        Bonds leave a labelled atom at the edge of its label box. An axis the
        bond runs parallel to does not clip.
        """
        if self.label.is_empty():
            return self.position

        direction = end - self.position
        label_bounds = self.label.bounds

        distances = []
        if direction.x > 0.0:
            distances.append(label_bounds.right / direction.x)
        elif direction.x < 0.0:
            distances.append(label_bounds.x / direction.x)
        if direction.y > 0.0:
            distances.append(label_bounds.bottom / direction.y)
        elif direction.y < 0.0:
            distances.append(label_bounds.y / direction.y)

        if not distances:
            return self.position
        return self.position + direction * min(distances)
