from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .constants import (
    AGENT_RADIUS,
    AGENT_SPEED,
    CELL_SIZE,
    CORRIDOR_THRESHOLD,
    EYE_HEIGHT,
    MAP_HEIGHT,
    MAP_WIDTH,
    SEED,
    VELOCITY_SMOOTHING,
    WALL_HEIGHT,
)
from .errors import InvalidConfiguration


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise InvalidConfiguration(msg)


@dataclass
class MapConfig:
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    seed: int = SEED
    cell_size: float = CELL_SIZE
    wall_height: float = WALL_HEIGHT
    corridor_threshold: float = CORRIDOR_THRESHOLD

    def __post_init__(self) -> None:
        _require(self.width >= 3, "width must be >= 3")
        _require(self.height >= 3, "height must be >= 3")
        _require(0 <= self.seed <= 0xFFFFFFFF, "seed must be an unsigned 32-bit integer")
        _require(self.cell_size > 0.0, "cell_size must be > 0")
        _require(self.wall_height > 0.0, "wall_height must be > 0")
        _require(0.0 <= self.corridor_threshold <= 2.0, "corridor_threshold in [0,2]")


@dataclass
class AgentConfig:
    speed: float = AGENT_SPEED
    radius: float = AGENT_RADIUS
    eye_height: float = EYE_HEIGHT
    smoothing: float = VELOCITY_SMOOTHING

    def __post_init__(self) -> None:
        _require(self.speed > 0.0, "speed must be > 0")
        _require(self.radius > 0.0, "radius must be > 0")
        _require(self.eye_height >= 0.0, "eye_height must be >= 0")
        _require(0.0 < self.smoothing <= 1.0, "smoothing in (0,1]")


@dataclass
class ViewerConfig:
    size_px: Tuple[int, int] = (800, 800)
    fps: int = 60
    show_hud: bool = True
    # World units visible across the shorter window side
    view_span: float = 300.0

    def __post_init__(self) -> None:
        _require(len(self.size_px) == 2, "size_px must be (w, h)")
        _require(self.size_px[0] > 0 and self.size_px[1] > 0, "size_px must be positive")
        _require(self.fps > 0, "fps must be > 0")
        _require(self.view_span > 0.0, "view_span must be > 0")


@dataclass
class SimConfig:
    map: MapConfig = field(default_factory=MapConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "SimConfig":
        d = cfg or {}
        viewer = dict(d.get("viewer") or {})
        if "size_px" in viewer:
            viewer["size_px"] = tuple(viewer["size_px"])
        try:
            return cls(
                map=MapConfig(**(d.get("map") or {})),
                agent=AgentConfig(**(d.get("agent") or {})),
                viewer=ViewerConfig(**viewer),
            )
        except TypeError as exc:
            # Unknown keys in a section
            raise InvalidConfiguration(str(exc)) from exc
