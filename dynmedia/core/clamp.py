from __future__ import annotations

from dynmedia.core.dimensions import Dimension, round_half_away


def clamp_dimension(width: int, height: int, max_width: int, max_height: int) -> Dimension:
    """Scale width/height down to the size limit, keeping the aspect ratio.

    Width is checked first. Reducing an oversized width can still leave the
    height above its limit, so the width branch runs a second pass with the
    reduced values. Height must be positive.
    """
    if width > max_width:
        ratio = width / height
        new_width = max_width
        new_height = round_half_away(new_width / ratio)
        return clamp_dimension(new_width, new_height, max_width, max_height)
    if height > max_height:
        ratio = width / height
        new_height = max_height
        new_width = round_half_away(new_height * ratio)
        return Dimension(width=new_width, height=new_height)
    return Dimension(width=width, height=height)
