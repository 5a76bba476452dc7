"""
Drawing and hit-testing dimensions, in world units.
"""

MOLECULE_PADDING = 3.0
ATOM_PADDING = 3.0
BOND_PADDING = 3.0

BOND_LENGTH = 30.0             # Length of a bond drawn into empty space
BOND_WIDTH = 1.0
BOND_OFFSETS = 2.0             # Spacing between the lines of a multiple bond
WEDGE_START_WIDTH = 1.0
WEDGE_END_WIDTH = 4.0
DASH_START_WIDTH = 1.0
DASH_END_WIDTH = 4.0
DASH_BOND_OFFSETS = 4.0        # Spacing between hatches of a dash bond
H_BOND_WIDTH = 3.0
H_BOND_OFFSETS = 4.0           # Spacing between hatches of a hydrogen bond

# Approximate glyph metrics for label layout (font size 10)
GLYPH_WIDTH = 6.0
SUBSCRIPT_GLYPH_WIDTH = 4.0
GLYPH_HEIGHT = 10.0
TOKEN_SEPARATION = 1.0

# Labels closer than this to the axis of a bond do not block that side
LABEL_BLOCK_THRESHOLD = 0.1
