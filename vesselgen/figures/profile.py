from __future__ import annotations

import os
from typing import Optional

import matplotlib

matplotlib.use("Agg", force=True)
matplotlib.rcParams["figure.facecolor"] = "white"
matplotlib.rcParams["savefig.facecolor"] = "white"
matplotlib.rcParams["svg.fonttype"] = "none"

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from ..config import GeometrySettings
from ..geom.spline import PointsLike, control_points_array
from ..models import BaseParameters
from ..pipeline.generate import build_vessel


def make_profile_figure(
    points: PointsLike,
    params: BaseParameters,
    out_path: str | os.PathLike[str],
    settings: Optional[GeometrySettings] = None,
    dpi: int = 200,
) -> str:
    """
    Draw the vessel half-section: base foot, outer profile, inner wall and control points.

    Heights are shown above the table (profile lifted by the base height), radius on x.
    Returns the written path.
    """
    geometry = build_vessel(points, params, settings=settings)
    P = control_points_array(points)
    h0 = float(params.height)

    fig, ax = plt.subplots(figsize=(5.0, 7.0), dpi=dpi)
    ax.add_patch(Rectangle((0.0, 0.0), params.outer_radius, h0, facecolor="#cfcfcf", edgecolor="#555555", lw=0.8, label="base"))

    if len(geometry.outer):
        outer = np.asarray(geometry.outer.points)
        inner = np.asarray(geometry.inner.points)
        ax.plot(outer[:, 0], outer[:, 1] + h0, color="#d62728", lw=1.6, label="outer profile")
        ax.plot(inner[:, 0], inner[:, 1] + h0, color="#1f77b4", lw=1.2, ls="--", label="inner wall")
        loop = np.asarray(geometry.profile.points)
        ax.fill(loop[:, 0], loop[:, 1] + h0, color="#d62728", alpha=0.15, lw=0)

    ax.scatter(P[:, 0], P[:, 1] + h0, s=28, color="#222222", zorder=5, label="control points")
    ax.axvline(0.0, color="#999999", lw=0.6, ls=":")

    ax.set_xlabel("radius [mm]")
    ax.set_ylabel("height [mm]")
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xlim(left=0.0)
    ax.set_ylim(bottom=0.0)
    ax.legend(loc="upper right", fontsize=7, frameon=False)
    ax.set_title(f"wall {params.wall_thickness:g} mm, base {params.outer_diameter:g} x {params.height:g} mm", fontsize=9)

    fig.tight_layout()
    fig.savefig(out_path, dpi=dpi, facecolor="white", bbox_inches="tight")
    plt.close(fig)
    return str(out_path)
