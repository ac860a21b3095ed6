#
# 2D overlap tests between legs and components.
#
# Everything here is in panel coordinates - origin at the top-left
# corner of the PCB, X to the right, Y down.
#
#  - circles and rectangles are positioned by their center
#  - rectangles may be rotated (degrees, clockwise on screen) about
#    their center
#  - legs are always axis aligned, and are positioned by their
#    top-left corner
#
# A leg that overlaps a component hole would turn into a degenerate
# boolean operation (and is useless anyway), so such legs are left
# out of the holder.
#
# Touching is not overlapping - all comparisons are strict.
#

import math

def rotate_point(x, y, cx, cy, degrees):
    rad = degrees*math.pi/180
    c = math.cos(rad)
    s = math.sin(rad)
    dx = x-cx
    dy = y-cy
    return [cx + dx*c - dy*s, cy + dx*s + dy*c]

def rectangle_corners(rect, rotation=None):
    if rotation is None:
        rotation = rect.get('rotation', 0)
    cx, cy = rect['x'], rect['y']
    hw = rect['width']/2
    hh = rect['height']/2
    corners = [
        [cx-hw, cy-hh],
        [cx+hw, cy-hh],
        [cx+hw, cy+hh],
        [cx-hw, cy+hh],
    ]
    if rotation == 0:
        return corners
    return [rotate_point(x, y, cx, cy, rotation) for x, y in corners]

def leg_bounds(leg):
    # left, top, right, bottom
    return [leg['x'], leg['y'], leg['x']+leg['width'], leg['y']+leg['height']]

def leg_corners(leg):
    left, top, right, bottom = leg_bounds(leg)
    return [[left, top], [right, top], [right, bottom], [left, bottom]]

def is_leg_overlapping_circle(leg, circle):
    left, top, right, bottom = leg_bounds(leg)
    cx, cy = circle['x'], circle['y']
    # closest point of the leg to the circle center
    px = min(max(cx, left), right)
    py = min(max(cy, top), bottom)
    dist_sq = (px-cx)**2 + (py-cy)**2
    return dist_sq < circle['radius']**2

def is_leg_overlapping_rectangle(leg, rect):
    leg_left, leg_top, leg_right, leg_bottom = leg_bounds(leg)
    rotation = rect.get('rotation', 0)
    if rotation == 0:
        rect_left = rect['x'] - rect['width']/2
        rect_right = rect['x'] + rect['width']/2
        rect_top = rect['y'] - rect['height']/2
        rect_bottom = rect['y'] + rect['height']/2
        separated = (rect_right <= leg_left or rect_left >= leg_right or
                     rect_bottom <= leg_top or rect_top >= leg_bottom)
        return not separated

    # Legs are axis aligned, so a corner test both ways is enough.
    # First, rectangle corners inside the leg
    for x, y in rectangle_corners(rect, rotation):
        if leg_left < x < leg_right and leg_top < y < leg_bottom:
            return True
    # Then leg corners inside the rectangle, in the rectangle's own
    # (un-rotated) frame
    hw = rect['width']/2
    hh = rect['height']/2
    for x, y in leg_corners(leg):
        lx, ly = rotate_point(x, y, rect['x'], rect['y'], -rotation)
        if abs(lx-rect['x']) < hw and abs(ly-rect['y']) < hh:
            return True
    return False

def is_leg_hidden(leg, circles, rectangles):
    for circle in circles:
        if is_leg_overlapping_circle(leg, circle):
            return True
    for rect in rectangles:
        if is_leg_overlapping_rectangle(leg, rect):
            return True
    return False

def filter_legs(legs, circles, rectangles):
    """ Returns the legs to build, and how many were left out """
    visible = [leg for leg in legs if not is_leg_hidden(leg, circles, rectangles)]
    return visible, len(legs)-len(visible)
