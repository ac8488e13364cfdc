"""
Visualization utilities for differential growth.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.collections import LineCollection

from .engine import DifferentialGrowth
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def _fit_axes(ax, segments: List[tuple], margin: float = 0.05):
    if not segments:
        return
    pts = np.array([p for seg in segments for p in seg])
    mins, maxs = pts.min(axis=0), pts.max(axis=0)
    pad = float(max(maxs - mins)) * margin + 1e-9
    ax.set_xlim(mins[0] - pad, maxs[0] + pad)
    ax.set_ylim(mins[1] - pad, maxs[1] + pad)


def visualize_growth(
    engine: DifferentialGrowth,
    line_color: str = 'navy',
    line_width: float = 1.0,
    show_points: bool = False,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    show: bool = True
):
    """Draw the current curves."""
    fig, ax = plt.subplots(figsize=figsize)

    segments = engine.get_segments()
    if segments:
        lc = LineCollection(segments, colors=line_color, linewidths=line_width)
        ax.add_collection(lc)

    if show_points:
        for points in engine.get_curves():
            ax.scatter(points[:, 0], points[:, 1], c=line_color, s=2)

    _fit_axes(ax, segments)
    ax.set_aspect('equal')
    ax.axis('off')
    ax.set_title(f"Iteration {engine.iteration}: {engine.point_count} points")

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor='mintcream', edgecolor='none')
        logger.info(f"Saved visualization to {save_path}")

    if show:
        plt.show()
    return fig, ax


def collect_frames(engine: DifferentialGrowth, steps: int, frame_skip: int = 1) -> List[Dict]:
    """
    Step the engine `steps` times, keeping the drawing segments of every
    `frame_skip`-th iteration plus the first and last state.
    """
    if frame_skip < 1:
        raise ConfigurationError('frame_skip', f"must be >= 1, got {frame_skip}")

    frames_data = []

    def collect_frame():
        frames_data.append({
            'segments': engine.get_segments(),
            'iteration': engine.iteration,
            'points': engine.point_count,
        })

    collect_frame()
    for _ in range(steps):
        engine.step()
        if engine.iteration % frame_skip == 0:
            collect_frame()
    if frames_data[-1]['iteration'] != engine.iteration:
        collect_frame()

    return frames_data


def animate_growth(
    engine: DifferentialGrowth,
    steps: int,
    interval: int = 50,
    line_color: str = 'navy',
    line_width: float = 1.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    frame_skip: int = 1,
    fps: int = 20,
    show: bool = True
) -> FuncAnimation:
    """
    Run `steps` iterations on the engine and animate them.

    frame_skip: Only record every Nth iteration. Higher = faster, fewer frames.
    """
    frames_data = collect_frames(engine, steps, frame_skip)
    logger.info(f"Collected {len(frames_data)} frames for animation")

    fig, ax = plt.subplots(figsize=figsize)
    ax.set_aspect('equal')
    ax.axis('off')
    # Fit to the final, most grown frame
    _fit_axes(ax, frames_data[-1]['segments'])

    collection = LineCollection([], colors=line_color, linewidths=line_width)
    ax.add_collection(collection)
    title = ax.set_title('Iteration: 0')

    def init():
        collection.set_segments([])
        return [collection]

    def update(frame_idx):
        data = frames_data[frame_idx]
        collection.set_segments(data['segments'])
        title.set_text(f"Iteration: {data['iteration']} ({data['points']} points)")
        return [collection]

    anim = FuncAnimation(
        fig, update,
        frames=len(frames_data),
        init_func=init,
        interval=interval,
        blit=False,
        repeat=True
    )

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Saving animation ({len(frames_data)} frames)...")
        anim.save(save_path, writer='pillow', fps=fps)
        logger.info(f"Saved animation to {save_path}")

    if show:
        plt.show()
    return anim


def collect_history(engine: DifferentialGrowth, steps: int) -> Dict[str, List[float]]:
    """Step the engine, recording point count and mean edge length after each step."""
    history = {
        'iteration': [engine.iteration],
        'points': [engine.point_count],
        'mean_edge_length': [engine.mean_edge_length()],
    }
    for _ in range(steps):
        engine.step()
        history['iteration'].append(engine.iteration)
        history['points'].append(engine.point_count)
        history['mean_edge_length'].append(engine.mean_edge_length())
    return history


def plot_growth_statistics(history: Dict[str, List[float]], save_path: Optional[str] = None,
                           show: bool = True):
    """Plot point count and mean edge length over the run."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    axes[0].plot(history['iteration'], history['points'], color='navy')
    axes[0].set_xlabel('Iteration')
    axes[0].set_ylabel('Points')
    axes[0].set_title('Point Count')

    axes[1].plot(history['iteration'], history['mean_edge_length'], color='forestgreen')
    axes[1].set_xlabel('Iteration')
    axes[1].set_ylabel('Mean Edge Length')
    axes[1].set_title('Edge Length')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    return fig, axes
