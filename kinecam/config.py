from __future__ import annotations

# Scalar smoothing (units/sec^2)
SCALAR_MAX_ACCELERATION = 200.0
SCALAR_MAX_DECELERATION = 200.0

# Angular smoothing on the circle (deg/sec^2)
ARC_MAX_ACCELERATION = 250.0
ARC_MAX_DECELERATION = 250.0

# Straight-line vector smoothing (units/sec^2)
VECTOR_MAX_ACCELERATION = 200.0
VECTOR_MAX_DECELERATION = 200.0

# Arc-ball camera tuning
ARCBALL_CENTER_ACCELERATION = 5.0
ARCBALL_CENTER_DECELERATION = 5.0
ARCBALL_ZOOM = 10.0  # initial distance from the center
ARCBALL_ZOOM_ACCELERATION = 10.0
ARCBALL_ZOOM_DECELERATION = 15.0

# Free camera
FREE_CAMERA_POSITION = (0.0, 0.0, 10.0)

# Orthographic 2D control
DEFAULT_EXTENTS = 1.0  # visible half-height in world units
DEFAULT_MIN_ROTATE_WIN_DISTANCE = 100.0  # pixels from mouse-down before rotating

# Mouse buttons
MOUSE_LEFT = 0
MOUSE_RIGHT = 1
MOUSE_CENTER = 2
MOUSE_BUTTONS = (MOUSE_LEFT, MOUSE_RIGHT, MOUSE_CENTER)
