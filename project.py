#
# Project files.
#
# Projects are saved by the editor as JSON, either plain (.json) or
# base64 encoded (.tht3d). Keys are camelCase:
#
# {
#   "name": "...", "label": "...",
#   "panelSettings": { "width", "height", "pcbThickness",
#                      "smdHeight", "printTolerance" },
#   "circles":    [ { "x", "y", "radius", "depth" } ],
#   "rectangles": [ { "x", "y", "width", "height", "depth", "rotation" } ],
#   "legs":       [ { "x", "y", "width", "height" } ]
# }
#
# Circles and rectangles are positioned by their center, legs by
# their top-left corner. Anything else in the file (image, zoom, ids,
# colors...) belongs to the editor, and is ignored.
#
# normalize() converts this to the dict the holder builder works on.
# It always builds fresh dicts - nothing is shared with the input.
#

# Standard packages
import base64
import binascii
import json

DEFAULT_PANEL = {
    'width' : 100,
    'height' : 100,
    'pcbThickness' : 1.6,
    'smdHeight' : 3,
    'printTolerance' : 0,
}

def number(record, key, what, default=None):
    value = record.get(key, default)
    if value is None:
        raise ValueError('%s: "%s" is missing'%(what, key))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError('%s: "%s" must be a number, got %r'%(what, key, value))
    return float(value)

def non_negative(record, key, what, default=None):
    value = number(record, key, what, default)
    if value < 0:
        raise ValueError('%s: "%s" must be >= 0, got %s'%(what, key, value))
    return value

def normalize(data):
    settings = dict(DEFAULT_PANEL)
    settings.update(data.get('panelSettings', {}))
    panel = {
        'width' : non_negative(settings, 'width', 'panel'),
        'height' : non_negative(settings, 'height', 'panel'),
        'pcb_thickness' : non_negative(settings, 'pcbThickness', 'panel'),
        'smd_height' : non_negative(settings, 'smdHeight', 'panel'),
        'print_tolerance' : non_negative(settings, 'printTolerance', 'panel', 0),
    }
    circles = []
    for i, c in enumerate(data.get('circles', [])):
        what = 'circle %d'%(i)
        circles.append({
            'x' : number(c, 'x', what),
            'y' : number(c, 'y', what),
            'radius' : non_negative(c, 'radius', what),
            'depth' : non_negative(c, 'depth', what),
        })
    rectangles = []
    for i, r in enumerate(data.get('rectangles', [])):
        what = 'rectangle %d'%(i)
        rectangles.append({
            'x' : number(r, 'x', what),
            'y' : number(r, 'y', what),
            'width' : non_negative(r, 'width', what),
            'height' : non_negative(r, 'height', what),
            'depth' : non_negative(r, 'depth', what),
            'rotation' : number(r, 'rotation', what, 0) % 360,
        })
    legs = []
    for i, l in enumerate(data.get('legs', [])):
        what = 'leg %d'%(i)
        legs.append({
            'x' : number(l, 'x', what),
            'y' : number(l, 'y', what),
            'width' : non_negative(l, 'width', what),
            'height' : non_negative(l, 'height', what),
        })
    return {
        'name' : str(data.get('name', '')),
        'label' : str(data.get('label', '')),
        'panel' : panel,
        'circles' : circles,
        'rectangles' : rectangles,
        'legs' : legs,
    }

def loads(text):
    text = text.strip()
    if not text.startswith('{'):
        # .tht3d files are base64 encoded
        try:
            text = base64.b64decode(text, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError('Not a project file: %s'%(e)) from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError('Not a project file: %s'%(e)) from e
    if not isinstance(data, dict):
        raise ValueError('Not a project file: top level must be an object')
    return normalize(data)

def load(filename):
    with open(filename, 'r') as fp:
        return loads(fp.read())
