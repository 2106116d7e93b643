import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .config import EngineConfig
from .constants import DEFAULT_DLAM
from .errors import BelowHorizon
from .integrators import rk4_step
from .models import GeodesicState, Mass, Point, RaySnapshot, RayStatus

logger = logging.getLogger(__name__)

@dataclass(eq=False)
class Ray:
    x: float; y: float
    state: GeodesicState
    trail: Deque[Point]
    max_distance: float
    min_spacing: float
    status: RayStatus = RayStatus.ALIVE

    @classmethod
    def create(cls, position: Point, direction: Point, rs: float,
               config: Optional[EngineConfig] = None) -> "Ray":
        config = config or EngineConfig()
        x, y = position
        vx, vy = direction
        state = GeodesicState.from_cartesian(x, y, vx, vy, rs)
        return cls(x, y, state, deque([(x, y)], maxlen=config.trail_capacity),
                   config.max_distance, config.trail_min_spacing)

    @property
    def position(self) -> Point:
        return self.x, self.y

    def advance(self, dlam: float, rs: float) -> RayStatus:
        """Step once and classify the ray on the updated state."""
        if self.status is not RayStatus.ALIVE:
            return self.status
        if self.state.r <= rs:
            self.status = RayStatus.CAPTURED
            return self.status

        self.state = rk4_step(self.state, dlam, rs)
        r = self.state.r
        # a non-finite radius only comes out of a step taken across the horizon
        if not math.isfinite(r) or r <= rs:
            self.status = RayStatus.CAPTURED
            return self.status

        self.x, self.y = self.state.position()
        if r > self.max_distance:
            self.status = RayStatus.ESCAPED
            return self.status

        last = self.trail[-1] if self.trail else None
        if last is None or math.hypot(self.x - last[0], self.y - last[1]) > self.min_spacing:
            self.trail.append((self.x, self.y))
        return self.status

    def snapshot(self) -> RaySnapshot:
        return RaySnapshot((self.x, self.y), tuple(self.trail), self.status)

@dataclass(frozen=True)
class TickReport:
    alive: int
    captured: int
    escaped: int

class RaySet:
    """All live rays around one mass.

    Rays are only reachable through ``rays()`` snapshots; a tick steps every
    ray, then compacts the collection in one pass so retired rays never show
    up in the next snapshot.
    """

    def __init__(self, mass: Mass, config: Optional[EngineConfig] = None):
        self.mass = mass
        self.config = config or EngineConfig()
        self._rays: List[Ray] = []

    @property
    def rs(self) -> float:
        return self.mass.schwarzschild_radius()

    def __len__(self) -> int:
        return len(self._rays)

    def add(self, position: Point, direction: Point) -> RaySnapshot:
        ray = Ray.create(position, direction, self.rs, self.config)
        self._rays.append(ray)
        return ray.snapshot()

    def spawn(self, position: Point, direction: Point, count: int, span: float = 0.0) -> int:
        """Launch ``count`` parallel rays spread over ``span`` across ``direction``.

        The rays sit on the line through ``position`` perpendicular to the
        direction of travel, evenly spaced from ``-span/2`` to ``+span/2``.
        Rays starting on or inside the horizon are skipped. Returns the
        number of rays actually added.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count!r}")
        if span < 0.0:
            raise ValueError(f"span must be non-negative, got {span!r}")
        dx, dy = direction
        norm = math.hypot(dx, dy)
        if norm == 0.0:
            raise ValueError("direction must be non-zero")
        px, py = -dy / norm, dx / norm

        x0, y0 = position
        spawned = 0
        for i in range(count):
            t = i / (count - 1) if count > 1 else 0.5
            offset = (t - 0.5) * span
            try:
                self.add((x0 + px * offset, y0 + py * offset), direction)
            except BelowHorizon as exc:
                logger.debug("skipping ray %d of %d: %s", i, count, exc)
                continue
            spawned += 1
        logger.info("spawned %d/%d rays, %d active", spawned, count, len(self._rays))
        return spawned

    def tick(self, dlam: Optional[float] = None) -> TickReport:
        if dlam is None:
            dlam = self.config.dlam
        rs = self.rs
        captured = escaped = 0
        for ray in self._rays:
            status = ray.advance(dlam, rs)
            if status is RayStatus.CAPTURED:
                captured += 1
            elif status is RayStatus.ESCAPED:
                escaped += 1
        if captured or escaped:
            self._rays[:] = [ray for ray in self._rays if ray.status is RayStatus.ALIVE]
            logger.debug("retired %d captured, %d escaped; %d alive",
                         captured, escaped, len(self._rays))
        return TickReport(len(self._rays), captured, escaped)

    def rays(self) -> Tuple[RaySnapshot, ...]:
        return tuple(ray.snapshot() for ray in self._rays)

    def clear(self) -> None:
        self._rays.clear()

def integrate_trajectory(mass: Mass, x: float, y: float, vx: float, vy: float,
                        steps: int = 1000, dlam: Optional[float] = None,
                        config: Optional[EngineConfig] = None):
    # default trace keeps every step; an explicit dlam wins over config.dlam
    if config is None:
        config = EngineConfig(dlam=DEFAULT_DLAM if dlam is None else dlam,
                              trail_capacity=steps + 1, trail_min_spacing=0.0)
    if dlam is None:
        dlam = config.dlam
    rs = mass.schwarzschild_radius()
    ray = Ray.create((x, y), (vx, vy), rs, config)
    taken = 0
    for _ in range(steps):
        taken += 1
        if ray.advance(dlam, rs) is not RayStatus.ALIVE:
            break
    return {
        "trail": list(ray.trail),
        "status": ray.status.value,
        "hit_horizon": ray.status is RayStatus.CAPTURED,
        "rs": rs,
        "steps": taken,
    }
