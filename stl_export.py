#
# STL output, from a flat vertex array.
#
# The vertex array holds 9 floats per triangle -
# x1 y1 z1 x2 y2 z2 x3 y3 z3. Anything that isn't a multiple of 9 is
# rejected outright; slicers don't forgive broken files, so we never
# write half a triangle.
#
# Binary STL layout (all little endian):
#
#   offset 0   : 80 byte header, zeros
#   offset 80  : uint32 triangle count
#   offset 84  : per triangle, 50 bytes
#                  float32 x 3 normal
#                  float32 x 9 vertices
#                  uint16 attribute byte count (0)
#

# Dependent packages
import numpy as np

# Local imports
from holdercommon import *

SOLID_NAME = 'THT-holder'
HEADER_SIZE = 80
COUNT_SIZE = 4
TRIANGLE_RECORD = np.dtype([
    ('normal', '<f4', (3,)),
    ('vertices', '<f4', (3, 3)),
    ('attr', '<u2'),
])
assert TRIANGLE_RECORD.itemsize == 50

def triangles_from_vertices(vertices):
    vertices = np.asarray(vertices, dtype=np.float32).reshape(-1)
    if len(vertices) % 9 != 0:
        raise MalformedVertexBufferError(
            'Vertex array has %d floats, not a multiple of 9'%(len(vertices)))
    return vertices.reshape(-1, 3, 3)

def face_normals(triangles):
    tris = triangles.astype(np.float64)
    normals = np.cross(tris[:,1]-tris[:,0], tris[:,2]-tris[:,0])
    lengths = np.linalg.norm(normals, axis=1)
    # Zero area triangles get a zero normal, not NaN
    good = lengths > 0
    normals[good] /= lengths[good][:,np.newaxis]
    normals[~good] = 0
    # no "-0.0" in the output
    return normals + 0.0

def to_ascii_stl(vertices, name=SOLID_NAME):
    triangles = triangles_from_vertices(vertices)
    normals = face_normals(triangles)
    lines = ['solid %s'%(name)]
    for tri, n in zip(triangles, normals):
        lines.append('facet normal %s %s %s'%(float(n[0]), float(n[1]), float(n[2])))
        lines.append('    outer loop')
        for v in tri:
            # numpy prints the shortest repr that round trips as float32
            lines.append('        vertex %s %s %s'%(v[0], v[1], v[2]))
        lines.append('    endloop')
        lines.append('endfacet')
    lines.append('endsolid %s'%(name))
    return lines

def to_binary_stl(vertices):
    triangles = triangles_from_vertices(vertices)
    records = np.zeros(len(triangles), dtype=TRIANGLE_RECORD)
    records['normal'] = face_normals(triangles)
    records['vertices'] = triangles
    header = bytes(HEADER_SIZE) + np.uint32(len(triangles)).astype('<u4').tobytes()
    return header + records.tobytes()

def estimate_binary_stl_size_bytes(vertex_count):
    if vertex_count % 9 != 0:
        raise MalformedVertexBufferError(
            'Vertex count %d is not a multiple of 9'%(vertex_count))
    return HEADER_SIZE + COUNT_SIZE + TRIANGLE_RECORD.itemsize*(vertex_count//9)

def estimate_binary_stl_size_kb(vertex_count):
    return round(estimate_binary_stl_size_bytes(vertex_count)/1024)
