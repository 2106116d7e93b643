import logging
import os
import threading
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from geodesic_core.config import SceneConfig
from geodesic_core.constants import c, weak_field_deflection
from geodesic_core.errors import GeodesicError
from geodesic_core.models import Mass
from geodesic_core.rays import integrate_trajectory
from geodesic_core.scene import Scene

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Ray API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# one scene per process; every read and write goes through _lock so a
# snapshot never sees a half-applied tick
_lock = threading.Lock()
_scene: Optional[Scene] = None

def get_scene() -> Scene:
    global _scene
    if _scene is None:
        _scene = Scene(SceneConfig.from_env())
    return _scene

@app.exception_handler(GeodesicError)
async def geodesic_error_handler(request: Request, exc: GeodesicError):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc), "error": type(exc).__name__})

class BHReq(BaseModel):
    mass: float
    impact_parameter: Optional[float] = Field(None, gt=0)

class IntegrateReq(BaseModel):
    mass: float
    x: float; y: float
    vx: float; vy: float
    steps: int = Field(1000, ge=0)
    dlam: float = Field(1.0, gt=0)

class SceneReq(BaseModel):
    mass: Optional[float] = None
    spawn_count: Optional[int] = Field(None, ge=1)

class SpawnReq(BaseModel):
    x: Optional[float] = None; y: Optional[float] = None
    vx: float = c; vy: float = 0.0
    count: Optional[int] = Field(None, ge=1)
    span: Optional[float] = Field(None, ge=0)

class TickReq(BaseModel):
    dlam: Optional[float] = Field(None, gt=0)
    ticks: int = Field(1, ge=1, le=10_000)

@app.post("/derived")
def derived(req: BHReq):
    rs = Mass(req.mass).schwarzschild_radius()
    out = {"mass": req.mass, "schwarzschild_radius": rs}
    if req.impact_parameter is not None:
        out["weak_field_deflection"] = weak_field_deflection(rs, req.impact_parameter)
    return out

@app.post("/integrate")
def integrate(req: IntegrateReq):
    bh = Mass(req.mass)
    return integrate_trajectory(bh, req.x, req.y, req.vx, req.vy, req.steps, req.dlam)

@app.post("/scene")
def reset_scene(req: SceneReq):
    global _scene
    base = SceneConfig.from_env()
    updates = req.model_dump(exclude_none=True)
    scene = Scene(base.model_copy(update=updates))
    with _lock:
        _scene = scene
        return scene.snapshot()

@app.post("/scene/spawn")
def spawn(req: SpawnReq):
    with _lock:
        scene = get_scene()
        cfg = scene.config
        position = (
            -cfg.spawn_edge * cfg.world_width if req.x is None else req.x,
            0.0 if req.y is None else req.y,
        )
        span = 2.0 * cfg.spawn_span * cfg.world_height if req.span is None else req.span
        count = cfg.spawn_count if req.count is None else req.count
        try:
            spawned = scene.rays.spawn(position, (req.vx, req.vy), count, span)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        return {"spawned": spawned, "total": len(scene.rays)}

@app.post("/scene/tick")
def tick(req: TickReq):
    reports: List[dict] = []
    with _lock:
        scene = get_scene()
        for _ in range(req.ticks):
            report = scene.tick(req.dlam)
            reports.append({"alive": report.alive, "captured": report.captured, "escaped": report.escaped})
        return {"tick": scene.ticks, "reports": reports}

@app.get("/scene/rays")
def rays():
    with _lock:
        return get_scene().snapshot()
