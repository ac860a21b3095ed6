#
# Builds the 3D holder for a PCB.
#
# The holder is a tray. The PCB sits upside down in it - components
# on the PCB hang down into the tray, into holes sized for them.
# Legs are pillars that support the PCB from below.
#
# Coordinate system notes:
#
# Projects use panel coordinates. Origin is the top-left corner of
# the PCB, X to the right, Y down - like a framebuffer (and like the
# photo of the PCB in the editor). The holder uses the regular 3D
# system, with Z pointing up, and the tray centered on X and Y.
# Hence Y has to be flipped, and rotations have to be negated when
# going from the panel to the holder.
#
# Here is the Z stackup of the (full depth) holder:
#
# Z = bottom+need      | top of the holder, PCB rests on the
#                      | components/legs here
#
# Z = bottom+component | bottom of the PCB. Tallest component
#     _height          | hangs down from here to the bottom
#
# Z = bottom+need-     | floor of the cavity every holder has.
#     empty            | Room for the PCB and its SMD parts.
#
# Z = bottom           | bottom of the deepest component hole
#
# Z = 0                | bottom of the holder
#
# where
#   empty  = pcb_thickness + smd_height
#   need   = pcb_thickness + component_height
#
# The "hollow" holder is the top slice of this - it only has the
# cavity, and component holes go all the way through it. The
# "positive" is a mockup of the PCB - a plate with components
# standing on it as pillars.
#
# The holder is made by a fixed sequence of stages, each taking the
# solids made so far and returning new ones. Order matters - later
# stages expect the cavities from the earlier ones.
#

# Standard packages
import copy

# Local imports
from holdercommon import *
from primitives import box, cylinder, make_solid
import overlap
import label as text_label

# Edge cutouts take this much of the width (or height) of each wall
CUTOUT_FRACTION = 1/3

def holder_params(project, cfg=None, font=None):
    """ Derived quantities, shared by all the stages """
    panel = project['panel']
    circles = project.get('circles', [])
    rectangles = project.get('rectangles', [])
    legs = project.get('legs', [])
    tol = panel.get('print_tolerance', 0)

    empty_height = panel['pcb_thickness'] + panel['smd_height']
    component_height = max([panel['smd_height']] +
                           [r['depth'] for r in rectangles] +
                           [c['depth'] for c in circles])
    bottom = cfg_value(cfg, 'holder', 'bottom_thickness', BOTTOM_THICKNESS)
    visible_legs, hidden_legs_count = overlap.filter_legs(legs, circles, rectangles)
    params = {
        'panel' : panel,
        'circles' : circles,
        'rectangles' : rectangles,
        'legs' : visible_legs,
        'hidden_legs_count' : hidden_legs_count,
        'tolerance' : tol,
        'adj_width' : panel['width'] + 2*tol,
        'adj_height' : panel['height'] + 2*tol,
        'empty_height' : empty_height,
        'component_height' : component_height,
        'need_height' : panel['pcb_thickness'] + component_height,
        'hollow_height' : empty_height + bottom,
        'bottom' : bottom,
        'edge' : cfg_value(cfg, 'holder', 'edge_thickness', EDGE_THICKNESS),
        'round_correction' : cfg_value(cfg, 'holder', 'round_correction', ROUND_CORRECTION),
        'text_thickness' : cfg_value(cfg, 'label', 'thickness', TEXT_THICKNESS),
        'positive_base' : cfg_value(cfg, 'positive', 'base_thickness', POSITIVE_BASE_THICKNESS),
        'label' : None,
        'label_skipped' : False,
    }
    text = project.get('label', '').strip()
    if text:
        # Font trouble is an error. Text that doesn't fit is not.
        if font is None:
            font = text_label.shared_font(
                cfg_value(cfg, 'label', 'font', '') or None,
                cfg_value(cfg, 'label', 'scad_font', text_label.DEFAULT_SCAD_FONT))
        ratio = cfg_value(cfg, 'label', 'fill_ratio', 0.75)
        fit = text_label.fit_text(text, font,
                ratio*label_span(params)[1], ratio*empty_height,
                max_size=cfg_value(cfg, 'label', 'max_font_size', 20),
                min_size=cfg_value(cfg, 'label', 'min_font_size', 1),
                step=cfg_value(cfg, 'label', 'font_size_step', 1))
        if fit is None:
            params['label_skipped'] = True
        else:
            params['label'] = {
                'text' : text,
                'size' : fit[0],
                'outline' : fit[1],
                'scad_font' : font.scad_font,
            }
    return params

def panel_to_holder(params, x, y):
    return x - params['adj_width']/2, params['adj_height']/2 - y

def cavity_z(params):
    return params['bottom'] + params['need_height'] - params['empty_height']

def label_span(params):
    """
    Center X and width of the stretch of front wall that carries the
    label: left of the edge cutout, up to the corner of the cavity.
    Nothing is cut out of the wall there, so every glyph has wall
    behind it.
    """
    w = params['adj_width']
    left = -w/2
    right = -w*CUTOUT_FRACTION/2
    return (left+right)/2, right-left

def stage_shell(params, solids):
    outer_w = params['adj_width'] + 2*params['edge']
    outer_h = params['adj_height'] + 2*params['edge']
    main = box(outer_w, outer_h, params['need_height'] + params['bottom'])
    # hollow shares the top face of main
    hollow = box(outer_w, outer_h, params['empty_height'] + params['bottom']).translate(
                z=params['need_height'] - params['empty_height'])
    return {'main': main, 'hollow': hollow}

def stage_cavity(params, solids):
    cavity = box(params['adj_width'], params['adj_height'],
                 params['empty_height'] + params['round_correction']).translate(
                z=cavity_z(params))
    return {name: solid.subtract(cavity) for name, solid in solids.items()}

def stage_edge_cutouts(params, solids):
    w = params['adj_width']
    h = params['adj_height']
    remover = box(w*CUTOUT_FRACTION, h*CUTOUT_FRACTION,
                  params['empty_height'] + params['round_correction']).translate(
                z=cavity_z(params))
    deltas = [[w/2, 0], [-w/2, 0], [0, h/2], [0, -h/2]]
    result = dict(solids)
    for dx, dy in deltas:
        cutter = remover.translate(dx, dy)
        result = {name: solid.subtract(cutter) for name, solid in result.items()}
    return result

def hole_depths(params, depth):
    # The hollow holder is thin. A short component would leave just a
    # blind pocket in it, so punch right through instead.
    hollow_depth = depth
    if depth < params['hollow_height']:
        hollow_depth = params['hollow_height']*2
    return {'main': depth, 'hollow': hollow_depth}

def place_hole(params, hole, x, y, depth, rotation=0):
    if rotation:
        hole = hole.rotate(z=-rotation)
    hx, hy = panel_to_holder(params, x, y)
    return hole.translate(hx, hy, params['bottom'] + params['component_height'] - depth)

def stage_rectangles(params, solids):
    tol = params['tolerance']
    result = dict(solids)
    for rect in params['rectangles']:
        for name, depth in hole_depths(params, rect['depth']).items():
            hole = box(rect['width'] + 2*tol, rect['height'] + 2*tol,
                       depth + params['round_correction'])
            hole = place_hole(params, hole, rect['x'], rect['y'], depth,
                              rect.get('rotation', 0))
            result[name] = result[name].subtract(hole)
    return result

def stage_circles(params, solids):
    tol = params['tolerance']
    result = dict(solids)
    for circle in params['circles']:
        for name, depth in hole_depths(params, circle['depth']).items():
            hole = cylinder(circle['radius'] + tol, depth + params['round_correction'])
            hole = place_hole(params, hole, circle['x'], circle['y'], depth)
            result[name] = result[name].subtract(hole)
    return result

def stage_legs(params, solids):
    smd_height = params['panel']['smd_height']
    component_height = params['component_height']
    # Legs reach up to the bottom of the PCB
    heights = {
        'main' : [component_height, params['bottom']],
        'hollow' : [smd_height, params['bottom'] + component_height - smd_height],
    }
    result = dict(solids)
    for leg in params['legs']:
        x, y = panel_to_holder(params,
                    leg['x'] + leg['width']/2, leg['y'] + leg['height']/2)
        for name, (height, z) in heights.items():
            if height <= 0:
                continue # nothing to support
            pillar = box(leg['width'], leg['height'], height).translate(x, y, z)
            result[name] = result[name].union(pillar)
    return result

def stage_label(params, solids):
    info = params['label']
    if info is None:
        return solids
    overlap_depth = params['round_correction']
    text = make_solid({
        'type' : 'Text',
        'outline' : info['outline'],
        'thickness' : params['text_thickness'] + overlap_depth,
        'text' : info['text'],
        'size' : info['size'],
        'font' : info['scad_font'],
    })
    # Stand the text up on the front (-Y) face. Reading plane becomes
    # X/Z, and the text sticks out towards -Y.
    text = text.rotate(x=90)
    front = -(params['adj_height']/2 + params['edge'])
    z = cavity_z(params) + params['empty_height']/2
    x = label_span(params)[0]
    # dig in a bit, so the text and the wall aren't just touching
    text = text.translate(x, front + overlap_depth, z)
    result = dict(solids)
    result['main'] = result['main'].union(text)
    return result

HOLDER_STAGES = [
    ('shell', stage_shell),
    ('cavity', stage_cavity),
    ('edge_cutouts', stage_edge_cutouts),
    ('rectangles', stage_rectangles),
    ('circles', stage_circles),
    ('legs', stage_legs),
    ('label', stage_label),
]

def run_stages(params, stages=HOLDER_STAGES, solids=None):
    if solids is None:
        solids = {}
    for name, stage in stages:
        solids = stage(params, solids)
    return solids

def build_positive(params):
    # Mockup of the PCB. Exact dimensions, no tolerance, no legs.
    panel = params['panel']
    base_t = params['positive_base']
    positive = box(panel['width'], panel['height'], base_t)

    def position(x, y):
        return x - panel['width']/2, panel['height']/2 - y

    for rect in params['rectangles']:
        if rect['depth'] <= 0:
            continue
        pillar = box(rect['width'], rect['height'], rect['depth'])
        if rect.get('rotation', 0):
            pillar = pillar.rotate(z=-rect['rotation'])
        x, y = position(rect['x'], rect['y'])
        positive = positive.union(pillar.translate(x, y, base_t))
    for circle in params['circles']:
        if circle['depth'] <= 0:
            continue
        x, y = position(circle['x'], circle['y'])
        pillar = cylinder(circle['radius'], circle['depth'])
        positive = positive.union(pillar.translate(x, y, base_t))
    return positive

def build_holder_solids(project, cfg=None, font=None):
    params = holder_params(project, cfg, font)
    solids = run_stages(params)
    return {
        'main' : solids['main'],
        'hollow' : solids['hollow'],
        'positive' : build_positive(params),
        'hidden_legs_count' : params['hidden_legs_count'],
        'label_skipped' : params['label_skipped'],
    }

def mesh_info(solid):
    return {
        'vertex_array' : solid.vertex_array(),
        'dimensions' : solid.dimensions(),
    }

def build_holder_mesh(project, cfg=None, font=None):
    """
    Build the main, hollow and positive meshes for a project.

    Either everything is built, or an exception is raised. There are
    no partial results.
    """
    built = build_holder_solids(project, cfg, font)
    result = dict(built)
    for name in ['main', 'hollow', 'positive']:
        result[name] = mesh_info(built[name])
    return result

def submit_build(executor, project, cfg=None, font=None):
    # The build gets its own copy of the project, so the caller is
    # free to keep editing. Drop the future to "cancel".
    return executor.submit(build_holder_mesh, copy.deepcopy(project),
                           copy.deepcopy(cfg), font)
