import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .constants import RADIUS_FLOOR, schwarzschild_radius
from .errors import BelowHorizon, InvalidMass

Point = Tuple[float, float]

@dataclass(frozen=True)
class Mass:
    mass: float  # kg
    rs: float = field(init=False, repr=False)

    def __post_init__(self):
        if not (self.mass > 0.0 and math.isfinite(self.mass)):
            raise InvalidMass(self.mass)
        rs = schwarzschild_radius(self.mass)
        # tiny masses underflow to rs == 0
        if not rs > 0.0:
            raise InvalidMass(self.mass)
        object.__setattr__(self, "rs", rs)

    def schwarzschild_radius(self) -> float:
        return self.rs

@dataclass(frozen=True)
class GeodesicState:
    """Equatorial null geodesic state in Schwarzschild coordinates.

    ``r``, ``phi``, ``dr`` and ``dphi`` evolve with the affine parameter;
    ``E`` and ``L`` are the conserved energy and angular momentum fixed at
    creation and only ever copied forward.
    """
    r: float; phi: float
    dr: float; dphi: float
    E: float; L: float

    @classmethod
    def from_cartesian(cls, x: float, y: float, vx: float, vy: float, rs: float) -> "GeodesicState":
        r = math.hypot(x, y)
        phi = math.atan2(y, x)
        dr = vx * math.cos(phi) + vy * math.sin(phi)
        dphi = (-vx * math.sin(phi) + vy * math.cos(phi)) / max(r, RADIUS_FLOOR)
        L = r * r * dphi
        if r <= rs:
            raise BelowHorizon(r, rs)
        f = 1.0 - rs / r
        if f <= 0.0:
            raise BelowHorizon(r, rs)
        dt_dlam = math.sqrt((dr*dr)/(f*f) + (r*r*dphi*dphi)/f)
        E = f * dt_dlam
        return cls(r, phi, dr, dphi, E, L)

    def position(self) -> Point:
        return self.r * math.cos(self.phi), self.r * math.sin(self.phi)

    def velocity(self) -> Point:
        cos_p, sin_p = math.cos(self.phi), math.sin(self.phi)
        tangential = self.r * self.dphi
        return (self.dr * cos_p - tangential * sin_p,
                self.dr * sin_p + tangential * cos_p)

    def angular_momentum(self) -> float:
        return self.r * self.r * self.dphi

    def energy(self, rs: float) -> float:
        """E recomputed from the current rates via the null condition.

        Only defined outside the horizon; returns nan once r <= rs.
        """
        f = 1.0 - rs / self.r if self.r > 0.0 else -math.inf
        if f <= 0.0:
            return math.nan
        dr, dphi, r = self.dr, self.dphi, self.r
        return f * math.sqrt((dr*dr)/(f*f) + (r*r*dphi*dphi)/f)

class RayStatus(str, Enum):
    ALIVE = "alive"
    CAPTURED = "captured"
    ESCAPED = "escaped"

@dataclass(frozen=True)
class RaySnapshot:
    position: Point
    trail: Tuple[Point, ...]
    status: RayStatus
