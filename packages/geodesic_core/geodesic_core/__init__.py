from .constants import c, G, M_PI, schwarzschild_radius, weak_field_deflection
from .errors import GeodesicError, InvalidMass, BelowHorizon
from .config import EngineConfig, SceneConfig
from .models import Mass, GeodesicState, RayStatus, RaySnapshot
from .integrators import geodesic_rhs, rk4_step
from .rays import Ray, RaySet, TickReport, integrate_trajectory
from .scene import Scene
__all__ = ["c","G","M_PI","schwarzschild_radius","weak_field_deflection",
           "GeodesicError","InvalidMass","BelowHorizon","EngineConfig","SceneConfig",
           "Mass","GeodesicState","RayStatus","RaySnapshot","geodesic_rhs","rk4_step",
           "Ray","RaySet","TickReport","integrate_trajectory","Scene"]
