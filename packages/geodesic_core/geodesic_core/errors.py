class GeodesicError(Exception):
    """Base class for errors raised by the geodesic engine."""

class InvalidMass(GeodesicError, ValueError):
    def __init__(self, mass: float):
        self.mass = mass
        super().__init__(f"mass must be finite and give a positive Schwarzschild radius, got {mass!r} kg")

class BelowHorizon(GeodesicError, ValueError):
    """Spawn point lies on or inside the event horizon."""

    def __init__(self, r: float, rs: float):
        self.r = r
        self.rs = rs
        super().__init__(f"spawn radius {r:.6g} m is not outside the horizon (rs={rs:.6g} m)")
