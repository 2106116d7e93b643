import logging
from typing import Any, Dict, Optional

from .config import SceneConfig
from .constants import c
from .models import Mass
from .rays import RaySet, TickReport

logger = logging.getLogger(__name__)

class Scene:
    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config or SceneConfig()
        self.mass = Mass(self.config.mass)
        self.rays = RaySet(self.mass, self.config.engine)
        self.ticks = 0
        logger.info("scene ready: mass=%.4g kg rs=%.4g m",
                    self.mass.mass, self.mass.schwarzschild_radius())

    def spawn_wave(self, count: Optional[int] = None) -> int:
        cfg = self.config
        edge = (-cfg.spawn_edge * cfg.world_width, 0.0)
        span = 2.0 * cfg.spawn_span * cfg.world_height
        return self.rays.spawn(edge, (c, 0.0), cfg.spawn_count if count is None else count, span)

    def tick(self, dlam: Optional[float] = None) -> TickReport:
        report = self.rays.tick(dlam)
        self.ticks += 1
        return report

    def reset(self) -> None:
        self.rays.clear()
        self.ticks = 0

    def snapshot(self) -> Dict[str, Any]:
        return {
            "rs": self.mass.schwarzschild_radius(),
            "tick": self.ticks,
            "rays": [
                {"position": list(ray.position),
                 "trail": [list(p) for p in ray.trail],
                 "status": ray.status.value}
                for ray in self.rays.rays()
            ],
        }
