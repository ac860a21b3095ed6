#
# Things shared by all the holder generator modules.
#
# All dimensions are in millimeters.
#

BOTTOM_THICKNESS = 2
EDGE_THICKNESS = 2
# Every subtracted volume is padded by this much, so that no face of the
# cutter is coplanar with a face of the solid being cut.
ROUND_CORRECTION = 1
TEXT_THICKNESS = 1
POSITIVE_BASE_THICKNESS = 2

class HolderError(Exception):
    pass

class GeometryConstructionError(HolderError):
    pass

class CsgEvaluationError(HolderError):
    pass

class ResourceLoadError(HolderError):
    pass

class MalformedVertexBufferError(HolderError):
    pass

def clamp(value, lo, hi):
    return max(lo, min(value, hi))

def cfg_value(cfg, section, key, default):
    # cfg is the parsed TOML configuration, and may be partial (or None)
    if not cfg:
        return default
    return cfg.get(section, {}).get(key, default)
