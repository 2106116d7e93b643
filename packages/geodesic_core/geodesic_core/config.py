import os
from typing import Optional

from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_DLAM, MAX_DISTANCE, SAGITTARIUS_A_MASS, TRAIL_CAPACITY,
    TRAIL_MIN_SPACING, WORLD_HEIGHT, WORLD_WIDTH,
)

# values stay strings; pydantic coerces and validates them
def _env(name: str, default):
    raw = os.getenv(name)
    return default if raw is None or raw == "" else raw

class EngineConfig(BaseModel):
    model_config = {"frozen": True}

    dlam: float = Field(DEFAULT_DLAM, gt=0)
    max_distance: float = Field(MAX_DISTANCE, gt=0)
    trail_capacity: int = Field(TRAIL_CAPACITY, ge=1)
    trail_min_spacing: float = Field(TRAIL_MIN_SPACING, ge=0)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            dlam=_env("GEODESIC_DLAM", DEFAULT_DLAM),
            max_distance=_env("GEODESIC_MAX_DISTANCE", MAX_DISTANCE),
            trail_capacity=_env("GEODESIC_TRAIL_CAPACITY", TRAIL_CAPACITY),
            trail_min_spacing=_env("GEODESIC_TRAIL_MIN_SPACING", TRAIL_MIN_SPACING),
        )

class SceneConfig(BaseModel):
    # mass is validated by Mass itself so the engine reports InvalidMass
    mass: float = SAGITTARIUS_A_MASS
    world_width: float = Field(WORLD_WIDTH, gt=0)
    world_height: float = Field(WORLD_HEIGHT, gt=0)
    spawn_count: int = Field(50, ge=1)
    spawn_edge: float = Field(0.9, ge=0)  # fraction of world_width left of the mass
    spawn_span: float = Field(0.8, ge=0)  # fraction of world_height on each side
    engine: EngineConfig = Field(default_factory=EngineConfig)

    @classmethod
    def from_env(cls, engine: Optional[EngineConfig] = None) -> "SceneConfig":
        return cls(
            mass=_env("GEODESIC_MASS", SAGITTARIUS_A_MASS),
            spawn_count=_env("GEODESIC_SPAWN_COUNT", 50),
            engine=engine or EngineConfig.from_env(),
        )
