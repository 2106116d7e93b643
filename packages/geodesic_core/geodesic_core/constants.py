import math
c = 299_792_458.0
G = 6.67430e-11
M_PI = math.pi

# Reference scene (Sagittarius A*, viewed over a 2e11 m box)
SAGITTARIUS_A_MASS = 8.54e36  # kg
WORLD_WIDTH = 1.0e11  # m
WORLD_HEIGHT = 7.5e10  # m

# Engine defaults
DEFAULT_DLAM = 1.0
MAX_DISTANCE = 2.0e11  # m
TRAIL_CAPACITY = 800
TRAIL_MIN_SPACING = 1.0e8  # m
RADIUS_FLOOR = 1e-9
LAPSE_FLOOR = 1e-12

def schwarzschild_radius(mass: float) -> float:
    return 2.0 * G * mass / (c * c)

def weak_field_deflection(rs: float, b: float) -> float:
    """First-order light bending angle 2*rs/b for impact parameter b."""
    if b <= 0.0:
        raise ValueError(f"impact parameter must be positive, got {b!r}")
    return 2.0 * rs / b
