#!/usr/bin/env python
"""Load a recorded dataset and print the frame shown at one point of the loop.

Usage examples (from repo root):
    python scripts/replay_snapshot.py data/iceland-flights-2025-12-01.json
    python scripts/replay_snapshot.py data/iceland-flights-2025-12-01.json --progress 0.5
    python scripts/replay_snapshot.py https://example.com/flights.json --sim-time 1764590400
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from flightloop.config import settings
from flightloop.engine import InMemorySurface, ReplaySession
from flightloop.ingestors import DatasetError, DatasetLoader


async def main(args) -> int:
    try:
        dataset = await DatasetLoader(source=args.source).load()
    except DatasetError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    surface = InMemorySurface()
    session = ReplaySession(
        dataset,
        surface,
        window_seconds=args.window,
        max_trail_points=args.trail_points,
    )

    if args.sim_time is not None:
        sim_time = args.sim_time
    else:
        sim_time = dataset.min_time + args.progress * dataset.duration

    # Walk up to the target so trails have history behind them.
    start = max(dataset.min_time, sim_time - args.window)
    steps = max(1, args.steps)
    for index in range(steps + 1):
        session.tick_at(start + (sim_time - start) * index / steps)

    print(f"date={dataset.date} records={len(dataset)} skipped={dataset.skipped_records}")
    print(
        f"sim_time={sim_time} positions={len(surface.frame.positions.features)} "
        f"trails={len(surface.frame.trails.features)}"
    )
    if args.json:
        print(json.dumps(surface.frame.model_dump(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("source", nargs="?", default=settings.data_source)
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--progress", type=float, default=0.5, help="Loop position in [0, 1)")
    target.add_argument("--sim-time", type=float, help="Explicit simulated epoch seconds")
    parser.add_argument("--window", type=float, default=settings.window_seconds)
    parser.add_argument("--trail-points", type=int, default=settings.max_trail_points)
    parser.add_argument("--steps", type=int, default=20, help="Ticks used to build trails")
    parser.add_argument("--json", action="store_true", help="Dump the full frame")
    return parser


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main(build_parser().parse_args())))
