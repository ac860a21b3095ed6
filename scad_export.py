#
# OpenSCAD output of a holder.
#
# Every solid carries its solid2 tree, built in lock step with the
# mesh, so the output here is the same model that the STL comes
# from - just evaluated by OpenSCAD instead of manifold.
#

# Dependent packages
from solid2 import scad_render

# Local imports
from scad_module import ModuleRegistry

VARIANT_COMMENTS = {
    'main' : 'Full depth holder. Holes for all components.',
    'hollow' : 'Shallow holder. Just the cavity for the PCB and SMD parts.',
    'positive' : 'Mockup of the PCB. Components standing on a plate.',
}

def to_scad(solids, variant, source='', config_text=''):
    registry = ModuleRegistry()
    models = {}
    for name in ['main', 'hollow', 'positive']:
        models[name] = registry.module('holder_%s'%(name), solids[name].scad,
                                       comment=VARIANT_COMMENTS[name])
    body = scad_render(models[variant]())
    out = '''
// Auto generated file by the THT holder generator.
//
// Input project      : %s
// Variant            : %s
//
// All three variants are available as modules; the
// selected one is instantiated at the end of this file.

$fs = 0.05;

'''%(source, variant)
    out += registry.header()
    out += '\n'
    out += body
    if config_text:
        out += '''
/*
%s
*/
'''%(config_text)
    return out
