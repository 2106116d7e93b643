import math
from dataclasses import replace

from .constants import LAPSE_FLOOR, RADIUS_FLOOR
from .models import GeodesicState

def geodesic_rhs(state: GeodesicState, rs: float):
    r = max(state.r, RADIUS_FLOOR)
    dr, dphi, E = state.dr, state.dphi, state.E
    f = 1.0 - rs / r
    if abs(f) < LAPSE_FLOOR:
        f = math.copysign(LAPSE_FLOOR, f)
    dt_dlam = E / f
    rhs0 = dr
    rhs1 = dphi
    rhs2 = -(rs / (2.0 * r * r)) * f * (dt_dlam * dt_dlam) + (rs / (2.0 * r * r * f)) * (dr * dr) + (r - rs) * (dphi * dphi)
    rhs3 = -2.0 * dr * dphi / r
    return rhs0, rhs1, rhs2, rhs3

def rk4_step(state: GeodesicState, dlam: float, rs: float) -> GeodesicState:
    """Advance ``state`` by one classical RK4 step; E and L are carried unchanged."""
    y0 = (state.r, state.phi, state.dr, state.dphi)

    def add(a, b, f): return tuple(a[i] + f*b[i] for i in range(4))
    def at(y): return replace(state, r=y[0], phi=y[1], dr=y[2], dphi=y[3])
    k1 = geodesic_rhs(state, rs)
    k2 = geodesic_rhs(at(add(y0, k1, dlam/2.0)), rs)
    k3 = geodesic_rhs(at(add(y0, k2, dlam/2.0)), rs)
    k4 = geodesic_rhs(at(add(y0, k3, dlam)), rs)

    return at(tuple(
        y0[i] + (dlam / 6.0) * (k1[i] + 2*k2[i] + 2*k3[i] + k4[i])
        for i in range(4)
    ))
