#
# Text labels on holders.
#
# Glyph outlines come from matplotlib's TextPath, using either a font
# file, or matplotlib's bundled DejaVu Sans. TextPath hands back a set
# of closed loops - outer outlines as well as the holes in letters
# like 'o'. Combining the loops with XOR gives the even-odd fill, which
# is the right answer for fonts.
#

# Dependent packages
from matplotlib.font_manager import FontProperties, findfont, get_font
from matplotlib.textpath import TextPath
from shapely.geometry import Polygon
from shapely.ops import unary_union

# Standard packages
import functools

# Local imports
from holdercommon import *

DEFAULT_FONT_FAMILY = 'DejaVu Sans'
DEFAULT_SCAD_FONT = 'Liberation Sans'

class FontHandle:
    """
    Lazily loaded font. The font is loaded the first time it is
    needed, and the loaded font is reused from there on.

    Loading is idempotent - if two threads race on the first load,
    both load the same file, and whichever assignment lands last
    wins. The loaded font is never modified.
    """
    def __init__(self, path=None, scad_font=DEFAULT_SCAD_FONT):
        self.path = path
        self.scad_font = scad_font
        self._prop = None

    def get(self):
        if self._prop is None:
            self._prop = load_font(self.path)
        return self._prop

def load_font(path=None):
    if path:
        prop = FontProperties(fname=path)
    else:
        prop = FontProperties(family=DEFAULT_FONT_FAMILY)
    try:
        # get_font() actually opens and parses the file
        get_font(findfont(prop, fallback_to_default=False))
    except (OSError, RuntimeError, ValueError) as e:
        raise ResourceLoadError('Unable to load font %s: %s'%
            (path or DEFAULT_FONT_FAMILY, e)) from e
    return prop

@functools.lru_cache(maxsize=None)
def shared_font(path=None, scad_font=DEFAULT_SCAD_FONT):
    # Process wide, one handle per font, created once, never torn down
    return FontHandle(path, scad_font)

def text_path(text, size, font):
    # size is the em size in mm
    return TextPath((0, 0), text, size=size, prop=font.get())

def outline_from_path(path):
    outline = Polygon()
    for loop in path.to_polygons():
        if len(loop) < 3:
            continue
        poly = Polygon(loop).buffer(0)
        if poly.area > 0:
            outline = outline.symmetric_difference(poly)
    # merge pieces that just touch
    return unary_union(outline.buffer(0))

def fit_text(text, font, max_width, max_height,
             max_size=20, min_size=1, step=1):
    """
    Find the largest font size (trying max_size downwards) at which
    the text fits in max_width x max_height.

    Returns (size, outline), or None if nothing fits.
    """
    size = max_size
    while size >= min_size:
        path = text_path(text, size, font)
        # Path extents are cheap, and never smaller than the outline
        if len(path.vertices) > 0:
            extents = path.get_extents()
            if extents.width <= max_width and extents.height <= max_height:
                outline = outline_from_path(path)
                if not outline.is_empty:
                    return size, outline
        size -= step
    return None
