#
# This is the default configuration for the holder generator tool,
# and the values are chosen to be useful defaults that work reliably
# for most users. They won't necessarily be optimal for your printer.
#
# Keep this well commented, and current.  This will help tool
# users understand and tune.
#
def get():
    return '''
# All dimensions are specified in millimeters
#
# Panel (PCB) dimensions, components and legs come from the project
# file. This file controls how the holder is built around them.
#

[holder]
# The holder is a tray. The PCB sits in it upside down, with its
# through hole components hanging down into holes made for them.

# Thickness of the floor of the tray, below the deepest component
# hole.
bottom_thickness = 2

# Thickness of the walls around the PCB.
edge_thickness = 2

# Holes and cavities are cut a bit taller than needed, so that no
# cut ends exactly on a face of the holder. Such coincident faces
# trip up boolean operations. Must be positive. Doesn't change the
# size of the holder.
round_correction = 1

[positive]
# The "positive" is a mockup of the PCB - a plate the size of the
# PCB, with components standing on it at their full depth. Handy
# to check placement before printing the real thing.
base_thickness = 2

[label]
# The project label is printed on the front wall of the holder, on
# the stretch of wall left of the edge cutout.
#
# Font file (TTF/OTF) for the label. Leave empty to use the DejaVu
# Sans font that comes with matplotlib.
font = ""

# Font name used when writing OpenSCAD output. OpenSCAD looks
# fonts up by name, not by file.
scad_font = "Liberation Sans"

# Height of the raised text
thickness = 1

# The label starts at max_font_size, and shrinks in font_size_step
# steps until it fits within fill_ratio of that stretch of wall
# (a third of the width) and of the cavity depth. If it does not
# fit even at min_font_size, the label is left out (with a warning).
max_font_size = 20
min_font_size = 1
font_size_step = 1
fill_ratio = 0.75

[export]
# Name written into ASCII STL files
solid_name = "THT-holder"
'''
