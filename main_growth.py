"""
Main entry point for differential growth.

Configuration is loaded from config/growth.json (defaults when missing).
Seeds a curve, grows it, then saves a drawing or an animation to output_dir.
"""

import logging
from pathlib import Path

from diffgrowth import (
    DifferentialGrowth,
    GrowthCurve,
    generate_points_on_circle,
    generate_random_blob,
    load_config,
    profiler,
    setup_logging,
)
from diffgrowth.profiling import profile_block
from diffgrowth.visualization import animate_growth, visualize_growth


def main():
    setup_logging(logging.INFO)
    logger = logging.getLogger("diffgrowth.main")

    config = load_config()

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    cx, cy = config.start_center
    if config.random_seed is None:
        points = generate_points_on_circle(cx, cy, config.start_radius, config.start_points)
    else:
        points = generate_random_blob(cx, cy, config.start_radius, config.start_points,
                                      seed=config.random_seed)

    engine = DifferentialGrowth.from_config([GrowthCurve(points, closed=config.closed)], config)
    profiler.enable()

    if config.animate:
        with profile_block("animate"):
            animate_growth(
                engine,
                config.iterations,
                save_path=str(output_dir / "growth.gif"),
                frame_skip=config.frame_skip
            )
    else:
        engine.grow(config.iterations, progress=True)
        with profile_block("render"):
            visualize_growth(engine, save_path=str(output_dir / "growth.png"))

    logger.info(f"Final curve: {engine.point_count} points after {engine.iteration} iterations")
    profiler.log_stats()


if __name__ == '__main__':
    main()
