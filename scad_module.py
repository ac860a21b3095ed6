#
# SolidPython2 doesn't have a module construct. This is an
# implementation of "module", used to keep the exported OpenSCAD
# code modular - each holder variant becomes one module.
#
# Reference:
# https://github.com/SolidCode/SolidPython/issues/197#issuecomment-2424904674
#
# Unlike the snippet in that comment, the registry isn't global - every export
# creates its own ModuleRegistry, so repeated exports in the same
# process don't pick up each other's modules.
#

from solid2.extensions.greedy_scad_interface import *
from solid2.core.utils import indent
from solid2 import *

class ModuleRegistry:
    def __init__(self):
        self.modules = {}

    def header(self):
        return ''.join(self.modules.values())

    def module(self, module_name, value, comment=None):
        """ Helps generate modular output """
        if not hasattr(value, '_render'):
            raise TypeError('must be a scad primitive')
        if module_name not in self.modules:
            moduleCode = f"/*\n{comment}\n*/\n" if comment else ""
            moduleCode += f"module {module_name}(){{\n"
            moduleCode += indent(value._render())
            moduleCode += "}\n"
            self.modules[module_name] = moduleCode

        # fake union to enable mixins.
        return lambda : union() + ScadValue(f"{module_name}();\n")
