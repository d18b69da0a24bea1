"""
Compass-rose label for the current heading: direction letters and the
angle in degrees, as sequences of glyph names.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..math.utils import normalize_degree

NORTH = "N"
SOUTH = "S"
EAST = "E"
WEST = "W"
DEGREE_SIGN = "°"
DIGITS = "0123456789"

@dataclass(frozen=True)
class DirectionLabel:
    """Glyphs to show for one heading."""
    
    directions: Tuple[str, ...]
    angle: Tuple[str, ...]
    heading: float
    
    @property
    def text(self) -> str:
        return "".join(self.directions) + " " + "".join(self.angle)

def direction_glyphs(heading: float, use_alternate_ordering: bool = False) -> Tuple[str, ...]:
    """
    Pick the direction letters for a compass heading.
    
    East/west and north/south are decided independently using open bands,
    so a heading exactly on a band edge does not get that letter.
    
    Args:
        heading: Compass heading in degrees [0, 360)
        use_alternate_ordering: Put east/west before north/south
        
    Returns:
        Tuple of one or two letters
    """
    east_west = None
    if 22.5 < heading < 157.5:
        east_west = EAST
    elif 202.5 < heading < 337.5:
        east_west = WEST
    
    north_south = None
    if 112.5 < heading < 247.5:
        north_south = SOUTH
    elif heading < 67.5 or heading > 292.5:
        north_south = NORTH
    
    if use_alternate_ordering:
        ordered = (east_west, north_south)
    else:
        ordered = (north_south, east_west)
    return tuple(glyph for glyph in ordered if glyph is not None)

def degree_glyphs(heading: float) -> Tuple[str, ...]:
    """
    Digits of the truncated heading without leading zeros, then a degree sign.
    
    >>> degree_glyphs(7.9)
    ('7', '°')
    >>> degree_glyphs(305.0)
    ('3', '0', '5', '°')
    """
    value = int(heading)
    glyphs: List[str] = []
    show = False
    if value >= 100:
        glyphs.append(DIGITS[value // 100])
        value %= 100
        show = True
    if value >= 10 or show:
        glyphs.append(DIGITS[value // 10])
        value %= 10
    glyphs.append(DIGITS[value])
    glyphs.append(DEGREE_SIGN)
    return tuple(glyphs)

class DirectionLabelComposer:
    """Builds the label shown next to the compass."""
    
    def __init__(self, use_alternate_ordering: bool = False):
        self.use_alternate_ordering = use_alternate_ordering
    
    def compose(self, target: float) -> DirectionLabel:
        """
        Compose the label for a target rotation.
        
        Args:
            target: Target rotation of the compass graphic, degrees [0, 360)
            
        Returns:
            DirectionLabel for the compass heading, which is the negated target
        """
        heading = normalize_degree(-target)
        return DirectionLabel(
            directions=direction_glyphs(heading, self.use_alternate_ordering),
            angle=degree_glyphs(heading),
            heading=heading,
        )
