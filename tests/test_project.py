#!/usr/bin/env python3
"""Project file loading tests (.json and base64 .tht3d)."""

import base64
import json
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
import project

EDITOR_PROJECT = {
    'image': 'data:image/png;base64,AAAA',
    'name': 'relay board',
    'label': 'RB-1',
    'zoom': 100,
    'panelSettings': {'width': 80, 'height': 50, 'pcbThickness': 1.6,
                      'smdHeight': 2.5, 'printTolerance': 0.2},
    'circles': [{'id': 'c1', 'x': 10, 'y': 12, 'radius': 4, 'depth': 11,
                 'fill': 'orange', 'opacity': 0.75}],
    'rectangles': [{'id': 'r1', 'x': 40, 'y': 25, 'width': 19, 'height': 15.5,
                    'depth': 15, 'rotation': 450}],
    'legs': [{'id': 'l1', 'x': 70, 'y': 40, 'width': 2, 'height': 2}],
}


class TestNormalize(unittest.TestCase):

    def test_editor_project(self):
        prj = project.normalize(EDITOR_PROJECT)
        self.assertEqual(prj['name'], 'relay board')
        self.assertEqual(prj['label'], 'RB-1')
        self.assertEqual(prj['panel'], {'width': 80, 'height': 50, 'pcb_thickness': 1.6,
                                        'smd_height': 2.5, 'print_tolerance': 0.2})
        self.assertEqual(prj['circles'], [{'x': 10, 'y': 12, 'radius': 4, 'depth': 11}])
        self.assertEqual(prj['rectangles'][0]['rotation'], 90)
        self.assertEqual(prj['legs'], [{'x': 70, 'y': 40, 'width': 2, 'height': 2}])

    def test_defaults(self):
        prj = project.normalize({})
        self.assertEqual(prj['panel'], {'width': 100, 'height': 100, 'pcb_thickness': 1.6,
                                        'smd_height': 3, 'print_tolerance': 0})
        self.assertEqual(prj['circles'], [])
        self.assertEqual(prj['label'], '')

    def test_rectangle_rotation_optional(self):
        prj = project.normalize({'rectangles': [{'x': 1, 'y': 1, 'width': 2,
                                                 'height': 2, 'depth': 1}]})
        self.assertEqual(prj['rectangles'][0]['rotation'], 0)

    def test_negative_dimension(self):
        with self.assertRaises(ValueError):
            project.normalize({'panelSettings': {'width': -1}})
        with self.assertRaises(ValueError):
            project.normalize({'circles': [{'x': 0, 'y': 0, 'radius': 1, 'depth': -2}]})

    def test_missing_and_bad_values(self):
        with self.assertRaises(ValueError):
            project.normalize({'legs': [{'x': 0, 'y': 0, 'width': 2}]})
        with self.assertRaises(ValueError):
            project.normalize({'legs': [{'x': '0', 'y': 0, 'width': 2, 'height': 2}]})

    def test_fresh_copies(self):
        data = json.loads(json.dumps(EDITOR_PROJECT))
        prj = project.normalize(data)
        prj['circles'][0]['x'] = 99
        self.assertEqual(data['circles'][0]['x'], 10)


class TestLoad(unittest.TestCase):

    def _write(self, text, suffix):
        fd, path = tempfile.mkstemp(suffix=suffix)
        with os.fdopen(fd, 'w') as fp:
            fp.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_json(self):
        path = self._write(json.dumps(EDITOR_PROJECT), '.json')
        self.assertEqual(project.load(path)['panel']['width'], 80)

    def test_tht3d(self):
        encoded = base64.b64encode(json.dumps(EDITOR_PROJECT).encode('utf-8')).decode('ascii')
        path = self._write(encoded + '\n', '.tht3d')
        self.assertEqual(project.load(path)['label'], 'RB-1')

    def test_garbage(self):
        with self.assertRaises(ValueError):
            project.loads('this is not a project')
        with self.assertRaises(ValueError):
            project.loads('{"circles": [}')
        with self.assertRaises(ValueError):
            project.loads('[]')


if __name__ == '__main__':
    unittest.main()
