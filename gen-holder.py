#!/usr/bin/env python3

#
# Usage notes:
#
# Generates a 3D printable holder for THT assembly of a PCB, from a
# project file saved by the editor (.json, or .tht3d).
#
#   gen-holder.py board.tht3d holder.stl
#   gen-holder.py --variant hollow board.tht3d holder-hollow.stl
#   gen-holder.py --output-format oscad board.json holder.scad
#
# The holder is computed right here (no external tools needed). The
# OpenSCAD output is for those who want to look inside, or tweak.
#

# Standard imports
import argparse
import os
import sys
import time
import tomllib

# Local imports
from holdercommon import *
import default_config
import holder_mesh
import project
import scad_export
import stl_export

parser = argparse.ArgumentParser()
parser.add_argument("--config", help='Use specified configuration options file')
parser.add_argument("--variant", default='main',
                    choices=['main', 'hollow', 'positive'],
                    help='''Holder to generate. "main" holds all components at
full depth, "hollow" is a shallow holder for the PCB only, "positive" is a
mockup of the PCB with its components.''')
parser.add_argument("--output-format", default='stl',
                    choices=['stl', 'ascii-stl', 'oscad'],
                    help='Output file format')
parser.add_argument("project", help='Project file (.json or .tht3d) to process')
parser.add_argument("output", help='Output file to generate.')
args = parser.parse_args()

if args.config:
    try:
        with open(args.config, 'r') as fp:
            config_text = fp.read()
        cfg = tomllib.loads(config_text)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print('ERROR: Unable to load configuration file %s : %s'%(args.config, e))
        sys.exit(-1)
else:
    config_text = default_config.get()
    cfg = tomllib.loads(config_text)

try:
    prj = project.load(args.project)
except (OSError, ValueError) as e:
    print('ERROR: Unable to load project %s : %s'%(args.project, e))
    sys.exit(-1)

panel = prj['panel']
print('INFO: Panel %sx%s mm, %d circles, %d rectangles, %d legs'%(
    panel['width'], panel['height'],
    len(prj['circles']), len(prj['rectangles']), len(prj['legs'])))

start = time.time()
try:
    built = holder_mesh.build_holder_solids(prj, cfg)
except HolderError as e:
    print('ERROR: Holder generation failed : %s'%(e))
    sys.exit(-1)
print('INFO: Built holder in %.2f seconds'%(time.time()-start))

if built['hidden_legs_count'] > 0:
    print('WARNING: %d leg(s) overlap components, and are left out.'%(
        built['hidden_legs_count']))
if built['label_skipped']:
    print('WARNING: Label "%s" does not fit on the holder, and is left out.'%(
        prj['label']))

solid = built[args.variant]
dims = solid.dimensions()
print('INFO: %s holder is %.2f x %.2f x %.2f mm'%(
    args.variant, dims['width'], dims['height'], dims['depth']))

try:
    if args.output_format == 'oscad':
        with open(args.output, 'w') as fp:
            fp.write(scad_export.to_scad(built, args.variant,
                source=args.project,
                config_text=config_text))
    elif args.output_format == 'ascii-stl':
        name = cfg_value(cfg, 'export', 'solid_name', stl_export.SOLID_NAME)
        lines = stl_export.to_ascii_stl(solid.vertex_array(), name)
        with open(args.output, 'w') as fp:
            fp.write('\n'.join(lines))
            fp.write('\n')
    else:
        vertices = solid.vertex_array()
        print('INFO: Writing %d triangles, %d KB'%(len(vertices)//9,
            stl_export.estimate_binary_stl_size_kb(len(vertices))))
        with open(args.output, 'wb') as fp:
            fp.write(stl_export.to_binary_stl(vertices))
except (OSError, HolderError) as e:
    print('ERROR: Unable to write %s : %s'%(args.output, e))
    sys.exit(-1)

print('Done, output : %s'%(os.path.abspath(args.output)))
