#
# Boolean operations on solids.
#
# A Solid carries two descriptions of the same shape:
#
#  - a trimesh mesh, on which the booleans are actually evaluated,
#    using the manifold3d engine. Manifold works on exact mesh
#    topology and stays close to linear in triangle count, so the
#    dozens of sequential operations done per holder are fine.
#  - the equivalent solid2 (SolidPython) tree, so that the very
#    same model can be handed over to OpenSCAD.
#
# Solids are never modified. Every transform and every boolean
# returns a new Solid.
#

# Dependent packages
import numpy as np
import trimesh
from scipy.spatial.transform import Rotation

# Local imports
from holdercommon import *

UNION = 'union'
SUBTRACTION = 'subtraction'

class Solid:
    def __init__(self, mesh, scad):
        self.mesh = mesh
        self.scad = scad

    def translate(self, x=0, y=0, z=0):
        mesh = self.mesh.copy()
        mesh.apply_translation([x, y, z])
        return Solid(mesh, self.scad.translate([x, y, z]))

    def rotate(self, x=0, y=0, z=0):
        # Angles in degrees. Same convention as OpenSCAD's rotate([x,y,z]),
        # i.e. about X first, then Y, then Z - all about the fixed axes.
        matrix = np.eye(4)
        matrix[:3,:3] = Rotation.from_euler('xyz', [x, y, z], degrees=True).as_matrix()
        mesh = self.mesh.copy()
        mesh.apply_transform(matrix)
        return Solid(mesh, self.scad.rotate([x, y, z]))

    def union(self, other):
        return evaluate(self, other, UNION)

    def subtract(self, other):
        return evaluate(self, other, SUBTRACTION)

    @property
    def volume(self):
        return float(self.mesh.volume)

    @property
    def bounds(self):
        return self.mesh.bounds

    def dimensions(self):
        width, height, depth = [float(v) for v in self.mesh.extents]
        return {'width': width, 'height': height, 'depth': depth}

    def vertex_array(self):
        # 3 vertices x (x,y,z) per triangle, flattened
        return np.ascontiguousarray(self.mesh.triangles, dtype=np.float32).reshape(-1)

def evaluate(a, b, op):
    for operand in (a, b):
        if operand.mesh.is_empty or not operand.mesh.is_volume:
            raise CsgEvaluationError('%s operand is not a closed solid'%(op))
        if operand.volume <= 0:
            raise CsgEvaluationError('%s operand has no volume'%(op))
    if op == UNION:
        boolean = trimesh.boolean.union
        scad = a.scad + b.scad
    elif op == SUBTRACTION:
        boolean = trimesh.boolean.difference
        scad = a.scad - b.scad
    else:
        raise ValueError('Unknown CSG operation "%s"'%(op))
    try:
        result = boolean([a.mesh, b.mesh], engine='manifold')
    except Exception as e:
        raise CsgEvaluationError('%s failed: %s'%(op, e)) from e
    if result is None or result.is_empty or not result.is_watertight:
        raise CsgEvaluationError('%s produced a non-manifold result'%(op))
    return Solid(result, scad)
