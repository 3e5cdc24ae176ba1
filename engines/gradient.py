"""Single-channel gradient primitive shared by the gradient codecs.

Encoding places each stop at the centre of mass of its pixels, scaled into
1..255 per axis. Decoding maps an encoded axis value back to a pixel offset,
spreading it about the box centre by the gradient scale.
"""

from typing import Optional, Sequence

import numpy as np

from engines.tone_averager import average_value, channel_mask, gradient_endpoints
from models.compressed_boxes import ChannelStop, ChannelStops
from models.pixels import Color, Position
from utils.constants import STOP_AXIS_MAX
from utils.raster import fill_region, linear_gradient_fill


def stop_offset(value: int, box_size: int, gradient_scale: float) -> float:
    """Pixel offset within a box of an encoded stop axis value."""
    spread = ((value / STOP_AXIS_MAX) - 0.5) * 2 * gradient_scale
    return (box_size / 2) + spread * box_size


def channel_color(value: int, channel: int) -> Color:
    """Colour carrying ``value`` in one channel and zero in the others."""
    rgb = [0, 0, 0]
    rgb[channel] = value
    return Color(*rgb)


def channel_stops(positions: np.ndarray, values: np.ndarray, box_size: int) -> ChannelStops:
    """Light and dark stops of one channel of a box.

    Pixels are split on the channel's own mean. An empty dark side reuses the
    light value.
    """
    mask = channel_mask(values)
    light_pos, dark_pos = gradient_endpoints(positions, mask, box_size)
    light_value = average_value(values[mask])
    dark_value = average_value(values[~mask])
    if dark_value is None:
        dark_value = light_value
    return ChannelStops(
        light=ChannelStop(pos=light_pos, value=light_value),
        dark=ChannelStop(pos=dark_pos, value=dark_value),
    )


def fill_box_gradient(
    buffer: np.ndarray,
    box_x: int,
    box_y: int,
    box_size: int,
    gradient_scale: float,
    light_pos: Optional[Position],
    light_color: Sequence[int],
    dark_pos: Optional[Position],
    dark_color: Sequence[int],
    lighten: bool = False,
) -> None:
    """Render one box: a gradient when both stops are present, else a flat fill."""
    x0 = box_x * box_size
    y0 = box_y * box_size

    if light_pos is None or dark_pos is None:
        color = dark_color if light_pos is None and dark_pos is not None else light_color
        fill_region(buffer, x0, y0, box_size, box_size, color, lighten)
        return

    if light_pos == dark_pos:
        mid = [(int(a) + int(b) + 1) // 2 for a, b in zip(light_color, dark_color)]
        fill_region(buffer, x0, y0, box_size, box_size, mid, lighten)
        return

    start = (x0 + stop_offset(light_pos.x, box_size, gradient_scale),
             y0 + stop_offset(light_pos.y, box_size, gradient_scale))
    end = (x0 + stop_offset(dark_pos.x, box_size, gradient_scale),
           y0 + stop_offset(dark_pos.y, box_size, gradient_scale))
    linear_gradient_fill(buffer, x0, y0, box_size, box_size, start, light_color, end, dark_color, lighten)
