"""First-person agent movement and wall push-back on the occupancy grid.

Pure step function plus a thin stateful wrapper used by the session.

Per step:
- Build a horizontal forward/right basis from the camera facing.
- Sum the intent flags into a unit direction.
- Smooth velocity toward direction * speed with a fixed factor per step.
  The factor is not scaled by dt, so the response depends on frame rate.
- Integrate position, clamp into the safety box when the agent's cell is on
  the border ring, then push the agent out of each overlapping wall cell in
  the 3x3 neighbourhood. Pushes accumulate wall by wall in scan order.

The neighbourhood is centred on the cell reached before the clamp, so the
safety box only bounds the position on steps where the clamp fires. An agent
pressed against the border from an interior cell is held off the wall by
push-back alone and can rest outside the box (x = 15 - 6.6 = 8.4 against a
limit of 5 on a 5x5 grid with cell size 10).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from math import hypot
from typing import Optional, Tuple

from backrooms.constants import (
    AGENT_RADIUS,
    AGENT_SPEED,
    PUSH_EPSILON,
    VELOCITY_SMOOTHING,
)
from backrooms.sim.grid import Grid

_NEIGHBOUR_OFFSETS = (-1, 0, 1)


@dataclass(frozen=True)
class AgentState:
    """Agent state on the ground plane.

    - x, z: world position
    - vx, vz: world velocity (units/s)
    - speed: target movement speed
    - radius: collision radius
    """

    x: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vz: float = 0.0
    speed: float = AGENT_SPEED
    radius: float = AGENT_RADIUS


@dataclass(frozen=True)
class MovementIntent:
    """Input for one step: four movement flags and the camera facing (x, y, z)."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False
    facing: Tuple[float, float, float] = (0.0, 0.0, -1.0)


def _normalize(x: float, z: float) -> Tuple[float, float]:
    length = hypot(x, z)
    if length == 0.0:
        return 0.0, 0.0
    return x / length, z / length


def horizontal_basis(
    facing: Tuple[float, float, float],
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Return (forward, right) unit vectors on the (x, z) plane.

    right = normalize(cross(world_up, forward)). Both are zero when the
    facing has no horizontal component.
    """
    fx, fz = _normalize(float(facing[0]), float(facing[2]))
    rx, rz = _normalize(fz, -fx)
    return (fx, fz), (rx, rz)


def desired_direction(intent: MovementIntent) -> Tuple[float, float]:
    (fx, fz), (rx, rz) = horizontal_basis(intent.facing)
    mx = mz = 0.0
    if intent.forward:
        mx += fx
        mz += fz
    if intent.backward:
        mx -= fx
        mz -= fz
    if intent.left:
        mx -= rx
        mz -= rz
    if intent.right:
        mx += rx
        mz += rz
    return _normalize(mx, mz)


def smooth_velocity(
    vx: float, vz: float, target_x: float, target_z: float, factor: float
) -> Tuple[float, float]:
    """Close ``factor`` of the gap between current and target velocity."""
    return vx + (target_x - vx) * factor, vz + (target_z - vz) * factor


def clamp_to_bounds(grid: Grid, x: float, z: float) -> Tuple[float, float]:
    lim_x, lim_z = grid.mapping.clamp_limits()
    return max(-lim_x, min(lim_x, x)), max(-lim_z, min(lim_z, z))


def push_out_of_walls(
    grid: Grid, x: float, z: float, cx: int, cy: int, radius: float
) -> Tuple[float, float]:
    """Push (x, z) away from every wall cell around (cx, cy) it overlaps.

    Each wall is resolved on its own against the already-pushed position;
    there is no combined resolution pass.
    """
    mapping = grid.mapping
    min_dist = mapping.cell_size / 2 + radius
    for oy in _NEIGHBOUR_OFFSETS:
        for ox in _NEIGHBOUR_OFFSETS:
            nx, ny = cx + ox, cy + oy
            if not grid.is_wall(nx, ny):
                continue
            wx, wz = mapping.cell_to_world(nx, ny)
            dx = x - wx
            dz = z - wz
            dist = hypot(dx, dz)
            if PUSH_EPSILON < dist < min_dist:
                push = min_dist - dist
                x += dx / dist * push
                z += dz / dist * push
    return x, z


def step(
    grid: Optional[Grid],
    state: AgentState,
    intent: MovementIntent,
    dt: float,
    *,
    smoothing: float = VELOCITY_SMOOTHING,
) -> AgentState:
    """Advance the agent by one frame of ``dt`` seconds.

    A missing or zero-size grid means no collidable geometry: only velocity
    smoothing and integration are applied.
    """
    if not dt > 0.0:
        raise ValueError(f"dt must be > 0, got {dt}")

    dir_x, dir_z = desired_direction(intent)
    vx, vz = smooth_velocity(
        state.vx, state.vz, dir_x * state.speed, dir_z * state.speed, smoothing
    )
    x = state.x + vx * dt
    z = state.z + vz * dt

    if grid is not None and not grid.is_empty:
        cx, cy = grid.mapping.world_to_cell(x, z)
        if grid.mapping.in_outer_ring(cx, cy):
            x, z = clamp_to_bounds(grid, x, z)
        x, z = push_out_of_walls(grid, x, z, cx, cy, state.radius)

    return replace(state, x=x, z=z, vx=vx, vz=vz)


class AgentController:
    """Stateful wrapper around ``step`` holding the current grid and state.

    Interface:
    - reset(state?) -> AgentState
    - step(intent, dt) -> AgentState
    - set_grid(grid)
    - as_position() -> (x, z)
    - get_state() -> AgentState
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        speed: float = AGENT_SPEED,
        radius: float = AGENT_RADIUS,
        smoothing: float = VELOCITY_SMOOTHING,
    ) -> None:
        self.grid = grid
        self.speed = float(speed)
        self.radius = float(radius)
        self.smoothing = float(smoothing)
        self._state = AgentState(speed=self.speed, radius=self.radius)

    def set_grid(self, grid: Optional[Grid]) -> None:
        self.grid = grid

    def reset(self, state: Optional[AgentState] = None) -> AgentState:
        base = state or AgentState()
        self._state = replace(base, speed=self.speed, radius=self.radius)
        return self._state

    def step(self, intent: MovementIntent, dt: float) -> AgentState:
        self._state = step(self.grid, self._state, intent, dt, smoothing=self.smoothing)
        return self._state

    def as_position(self) -> Tuple[float, float]:
        return (self._state.x, self._state.z)

    def get_state(self) -> AgentState:
        return self._state
