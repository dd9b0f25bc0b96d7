from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from backrooms.errors import BackroomsError
from backrooms.sim.map_gen import generate, label_open_regions
from backrooms.utils.config import load_sim_config


def ascii_map(walls: np.ndarray) -> str:
    return "\n".join("".join("#" if c else "." for c in row) for row in walls)


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a backrooms grid and print stats")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--ascii", action="store_true", help="Print the grid as text")
    parser.add_argument("--save", type=str, default=None, help="Write walls to a .npy file")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    cli_map = {
        k: v
        for k, v in (("width", args.width), ("height", args.height), ("seed", args.seed))
        if v is not None
    }
    try:
        cfg = load_sim_config(args.config, [f"map.{k}={v}" for k, v in cli_map.items()])
        m = cfg.map
        grid = generate(
            m.width,
            m.height,
            m.seed,
            cell_size=m.cell_size,
            corridor_threshold=m.corridor_threshold,
        )
    except BackroomsError as exc:
        logging.error("%s", exc)
        return 2

    regions, _ = label_open_regions(grid)
    print(f"[MAP] size={grid.width}x{grid.height} seed={grid.seed}")
    print(f"[MAP] open_fraction={grid.open_fraction():.3f}")
    print(f"[MAP] open_regions={regions}")

    if args.ascii:
        print(ascii_map(grid.walls))
    if args.save:
        np.save(args.save, grid.walls)
        logging.info("Saved walls to %s", args.save)
    return 0


if __name__ == "__main__":
    sys.exit(main())
