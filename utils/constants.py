"""Codec constants and tunable defaults."""

DEFAULT_BOX_SIZE = 16

# Gradient scale assumed by formats that predate the scale byte
DEFAULT_GRADIENT_SCALE = 0.5
GRADIENT_SCALE_MAX = 1.0
GRADIENT_SCALE_STEPS = 255

# Perceived brightness weights (r, g, b) applied to squared 0-255 channels
LUMINANCE_WEIGHTS = (0.241, 0.691, 0.068)

# Encoded gradient stop axis range; 0 is reserved for an absent stop
STOP_AXIS_MAX = 255
