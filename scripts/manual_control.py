from __future__ import annotations

import argparse
import logging
import math

import pygame

from backrooms.sim.controller import MovementIntent
from backrooms.sim.session import MazeSession
from backrooms.utils.config import load_sim_config
from backrooms.viz.pygame_renderer import Renderer, RenderOptions


class LookController:
    """Yaw-only camera facing driven by arrow keys and horizontal mouse motion."""

    def __init__(self, turn_rate=2.5, mouse_sensitivity=0.004):
        self.yaw = 0.0
        self.turn_rate = turn_rate
        self.mouse_sensitivity = mouse_sensitivity

    def update(self, keys, mouse_dx, dt):
        if keys[pygame.K_LEFT]:
            self.yaw -= self.turn_rate * dt
        if keys[pygame.K_RIGHT]:
            self.yaw += self.turn_rate * dt
        self.yaw += mouse_dx * self.mouse_sensitivity

    def facing(self):
        # yaw 0 looks toward -z
        return (math.sin(self.yaw), 0.0, -math.cos(self.yaw))


def read_intent(keys, look: LookController) -> MovementIntent:
    return MovementIntent(
        forward=bool(keys[pygame.K_w]),
        backward=bool(keys[pygame.K_s]),
        left=bool(keys[pygame.K_a]),
        right=bool(keys[pygame.K_d]),
        facing=look.facing(),
    )


def main():
    parser = argparse.ArgumentParser(description="Walk the generated backrooms (top-down view)")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("overrides", nargs="*", help="OmegaConf dotlist overrides, e.g. map.width=80")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    overrides = list(args.overrides)
    if args.seed is not None:
        overrides.append(f"map.seed={args.seed}")
    cfg = load_sim_config(args.config, overrides)

    session = MazeSession(cfg)
    renderer = Renderer(RenderOptions(viewer=cfg.viewer), display=True)
    look = LookController()
    pygame.mouse.set_visible(False)
    pygame.event.set_grab(True)

    running = True
    dt = 1.0 / cfg.viewer.fps
    while running:
        mouse_dx = 0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEMOTION:
                mouse_dx += event.rel[0]
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_q, pygame.K_ESCAPE):
                    running = False
                elif event.key == pygame.K_r:
                    session.reseed(session.seed + 1)

        keys = pygame.key.get_pressed()
        look.update(keys, mouse_dx, dt)
        state = session.step(read_intent(keys, look), dt)
        renderer.render_frame(
            session.grid,
            (state.x, state.z),
            state.radius,
            facing=look.facing(),
            hud=session.hud_lines(),
        )
        # Frame driver supplies dt from the measured frame time
        dt = max(1e-3, renderer.clock.get_time() / 1000.0)

    renderer.close()


if __name__ == "__main__":
    main()
