#!/usr/bin/env python3
"""STL export tests: ASCII text, binary byte layout, size estimates."""

import os
import struct
import sys
import unittest

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from holdercommon import MalformedVertexBufferError
from stl_export import (to_ascii_stl, to_binary_stl, estimate_binary_stl_size_bytes,
                        estimate_binary_stl_size_kb, face_normals, SOLID_NAME)

TRIANGLE = [0, 0, 0, 1, 0, 0, 0, 1, 0]


def _floats(line, prefix):
    assert line.strip().startswith(prefix), line
    return [float(v) for v in line.strip()[len(prefix):].split()]


class TestAsciiStl(unittest.TestCase):

    def test_single_triangle(self):
        lines = to_ascii_stl(np.array(TRIANGLE, dtype=np.float32))
        self.assertEqual(lines[0], 'solid %s' % SOLID_NAME)
        self.assertEqual(lines[-1], 'endsolid %s' % SOLID_NAME)
        facets = [l for l in lines if l.startswith('facet normal')]
        self.assertEqual(len(facets), 1)
        self.assertEqual(_floats(facets[0], 'facet normal'), [0.0, 0.0, 1.0])
        vertices = [_floats(l, 'vertex') for l in lines if l.strip().startswith('vertex')]
        self.assertEqual(vertices, [[0, 0, 0], [1, 0, 0], [0, 1, 0]])
        self.assertEqual([l.strip() for l in lines[2:]],
                         ['outer loop', 'vertex 0.0 0.0 0.0', 'vertex 1.0 0.0 0.0',
                          'vertex 0.0 1.0 0.0', 'endloop', 'endfacet',
                          'endsolid %s' % SOLID_NAME])

    def test_custom_name(self):
        lines = to_ascii_stl(TRIANGLE, name='jig')
        self.assertEqual(lines[0], 'solid jig')
        self.assertEqual(lines[-1], 'endsolid jig')

    def test_degenerate_triangle_has_zero_normal(self):
        lines = to_ascii_stl([0, 0, 0, 1, 1, 1, 2, 2, 2])
        self.assertEqual(_floats(lines[1], 'facet normal'), [0.0, 0.0, 0.0])
        self.assertNotIn('nan', '\n'.join(lines))

    def test_empty(self):
        self.assertEqual(to_ascii_stl([]), ['solid %s' % SOLID_NAME, 'endsolid %s' % SOLID_NAME])

    def test_malformed(self):
        with self.assertRaises(MalformedVertexBufferError):
            to_ascii_stl(TRIANGLE + [1.0])


class TestBinaryStl(unittest.TestCase):

    def test_single_triangle_layout(self):
        data = to_binary_stl(np.array(TRIANGLE, dtype=np.float32))
        self.assertEqual(len(data), 134)
        self.assertEqual(data[:80], bytes(80))
        self.assertEqual(struct.unpack_from('<I', data, 80)[0], 1)
        normal = struct.unpack_from('<3f', data, 84)
        self.assertEqual(normal, (0.0, 0.0, 1.0))
        vertices = struct.unpack_from('<9f', data, 96)
        self.assertEqual(list(vertices), [float(v) for v in TRIANGLE])
        self.assertEqual(struct.unpack_from('<H', data, 132)[0], 0)

    def test_two_triangles(self):
        verts = TRIANGLE + [0, 0, 0, 0, 1, 0, 1, 0, 0]
        data = to_binary_stl(verts)
        self.assertEqual(len(data), 84 + 2 * 50)
        self.assertEqual(struct.unpack_from('<I', data, 80)[0], 2)
        # second triangle is wound the other way
        self.assertEqual(struct.unpack_from('<3f', data, 84 + 50), (0.0, 0.0, -1.0))

    def test_empty(self):
        data = to_binary_stl(np.zeros(0, dtype=np.float32))
        self.assertEqual(data, bytes(84))

    def test_malformed_rejected_whole(self):
        with self.assertRaises(MalformedVertexBufferError):
            to_binary_stl(TRIANGLE * 2 + [0, 0])


class TestNormals(unittest.TestCase):

    def test_normalized(self):
        tris = np.array([[[0, 0, 0], [3, 0, 0], [0, 0, 3]]], dtype=np.float32)
        n = face_normals(tris)
        np.testing.assert_allclose(n[0], [0, -1, 0])


class TestSizeEstimate(unittest.TestCase):

    def test_bytes(self):
        self.assertEqual(estimate_binary_stl_size_bytes(9), 134)
        self.assertEqual(estimate_binary_stl_size_bytes(0), 84)
        self.assertEqual(estimate_binary_stl_size_bytes(90), 584)

    def test_matches_actual_output(self):
        verts = TRIANGLE * 7
        self.assertEqual(estimate_binary_stl_size_bytes(len(verts)), len(to_binary_stl(verts)))

    def test_kb(self):
        self.assertEqual(estimate_binary_stl_size_kb(9 * 1000), 49)

    def test_malformed(self):
        with self.assertRaises(MalformedVertexBufferError):
            estimate_binary_stl_size_bytes(10)


if __name__ == '__main__':
    unittest.main()
