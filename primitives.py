#
# Primitive solids used to build holders.
#
# A primitive is described by a dict, tagged by 'type':
#
#   { 'type' : 'Box',      'width', 'height', 'depth' }
#   { 'type' : 'Cylinder', 'radius', 'height', 'segments' }
#   { 'type' : 'Text',     'outline', 'thickness', 'text', 'size', 'font' }
#
# make_solid() is the one place that turns these into solids, and
# it puts all of them in the same canonical position:
#
#  - centered on X and Y
#  - base (bottom face) at Z = 0, extending towards +Z
#
# For text, X/Y are the text's reading plane, and the glyph bounding
# box is centered. From there on, solids are moved about with
# Solid.translate() and Solid.rotate().
#

# Dependent packages
import trimesh
import solid2

# Local imports
from holdercommon import *
from csg import Solid

def box(width, height, depth):
    return make_solid({
        'type' : 'Box',
        'width' : width,
        'height' : height,
        'depth' : depth,
    })

def cylinder_segments(radius):
    # Bigger cylinders need more segments to look round
    return int(clamp(radius*8, 16, 48))

def cylinder(radius, height, segments=None):
    if segments is None:
        segments = cylinder_segments(radius)
    return make_solid({
        'type' : 'Cylinder',
        'radius' : radius,
        'height' : height,
        'segments' : segments,
    })

def require_positive(prim, *keys):
    for key in keys:
        if not prim[key] > 0:
            raise GeometryConstructionError('%s %s must be positive, got %s'%
                (prim['type'], key, prim[key]))

def make_solid(prim):
    if prim['type'] == 'Box':
        require_positive(prim, 'width', 'height', 'depth')
        w, h, d = prim['width'], prim['height'], prim['depth']
        mesh = trimesh.creation.box(extents=[w, h, d])
        scad = solid2.cube([w, h, d], center=True)
        return Solid(mesh, scad).translate(z=d/2)
    elif prim['type'] == 'Cylinder':
        require_positive(prim, 'radius', 'height', 'segments')
        r, h, n = prim['radius'], prim['height'], prim['segments']
        # trimesh builds these along Z already, centered at the origin
        mesh = trimesh.creation.cylinder(radius=r, height=h, sections=n)
        scad = solid2.cylinder(r=r, h=h, center=True, _fn=n)
        return Solid(mesh, scad).translate(z=h/2)
    elif prim['type'] == 'Text':
        require_positive(prim, 'thickness', 'size')
        outline = prim['outline']
        if outline.is_empty:
            raise GeometryConstructionError('Text "%s" has no outline'%(prim['text']))
        t = prim['thickness']
        min_x, min_y, max_x, max_y = outline.bounds
        parts = [trimesh.creation.extrude_polygon(poly, t)
                 for poly in getattr(outline, 'geoms', [outline])
                 if poly.geom_type == 'Polygon' and poly.area > 0]
        mesh = trimesh.util.concatenate(parts)
        center = [-(min_x+max_x)/2, -(min_y+max_y)/2, 0]
        mesh.apply_translation(center)
        # OpenSCAD's text() starts at the baseline origin, same as the
        # outline, so the same shift centers it. OpenSCAD picks its own
        # font by name though, so glyph shapes can differ slightly.
        scad = solid2.linear_extrude(height=t)(
                   solid2.text(prim['text'], size=prim['size'], font=prim['font'])
               ).translate(center)
        return Solid(mesh, scad)
    raise GeometryConstructionError('Unknown primitive type "%s"'%(prim['type']))
