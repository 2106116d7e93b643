import logging
import os
from celery import Celery
from geodesic_core.config import EngineConfig, SceneConfig
from geodesic_core.models import Mass
from geodesic_core.rays import integrate_trajectory
from geodesic_core.scene import Scene

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_BACKEND_URL = os.getenv("CELERY_BACKEND_URL", "redis://redis:6379/1")

celery = Celery("bh", broker=CELERY_BROKER_URL, backend=CELERY_BACKEND_URL)

logger = logging.getLogger(__name__)

@celery.task
def integrate_task(mass, x, y, vx, vy, steps=50000, dlam=1.0):
    bh = Mass(mass)
    return integrate_trajectory(bh, x, y, vx, vy, steps, dlam)

@celery.task
def trace_scene_task(mass, ticks=1000, dlam=1.0, spawn_count=50):
    """Launch one wave of rays and run it headless until every ray is gone or
    ``ticks`` runs out."""
    config = SceneConfig(mass=mass, spawn_count=spawn_count,
                         engine=EngineConfig(**{**EngineConfig.from_env().model_dump(), "dlam": dlam}))
    scene = Scene(config)
    spawned = scene.spawn_wave()
    captured = escaped = 0
    for _ in range(ticks):
        if not len(scene.rays):
            break
        report = scene.tick()
        captured += report.captured
        escaped += report.escaped
    logger.info("traced %d rays over %d ticks: %d captured, %d escaped",
                spawned, scene.ticks, captured, escaped)
    return {
        "spawned": spawned,
        "ticks": scene.ticks,
        "captured": captured,
        "escaped": escaped,
        "alive": len(scene.rays),
        "snapshot": scene.snapshot(),
    }
