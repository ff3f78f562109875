import logging
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.colors import LightSource
from matplotlib.patches import Polygon

from .models import CityModel, ZoneType
from .terrain_generator import TerrainField

logger = logging.getLogger(__name__)

ZONE_COLORS = {
    ZoneType.RESIDENTIAL: "#f4d03f",
    ZoneType.COMMERCIAL: "#5dade2",
    ZoneType.INDUSTRIAL: "#a569bd",
    ZoneType.DOWNTOWN: "#e74c3c",
    ZoneType.PARK: "#58d68d",
    ZoneType.WATER: "#2e86c1",
}


def render_city_map(model: CityModel, filename: str = "citymap.png",
                    terrain: Optional[TerrainField] = None,
                    resolution: int = 100) -> str:
    """Plan view of the generated city, saved as a PNG"""
    b = model.bounds
    extent = (b.min_x, b.max_x, b.min_y, b.max_y)
    fig, ax = plt.subplots(figsize=(12, 12))

    if terrain is not None:
        layer = terrain.sample_grid(extent, resolution)
        ls = LightSource(azdeg=315, altdeg=45)
        rgb = ls.shade(layer.heightmap, plt.cm.terrain, blend_mode="overlay")
        ax.imshow(rgb, extent=extent, origin="lower", alpha=0.5, zorder=0)
        water_overlay = np.zeros((*layer.heightmap.shape, 4))
        water_overlay[layer.water_mask] = [0.2, 0.4, 0.8, 0.6]
        ax.imshow(water_overlay, extent=extent, origin="lower", zorder=1)
    else:
        ax.set_facecolor("#f0ebe0")

    for zone in model.zones:
        poly = Polygon([tuple(p) for p in zone.boundary],
                       facecolor=ZONE_COLORS.get(zone.type, "#cccccc"),
                       edgecolor="#1a1a1a", linewidth=1.0, alpha=0.35, zorder=2)
        ax.add_patch(poly)

    for road in model.roads:
        xs = [p.x for p in road.path]
        ys = [p.y for p in road.path]
        ax.plot(xs, ys, color="#2a2a2a", linewidth=road.width / 6, alpha=0.8, zorder=3)

    for bldg in model.buildings:
        ax.add_patch(Polygon([tuple(p) for p in bldg.footprint], facecolor="#7f8c8d",
                             edgecolor="#1a1a1a", linewidth=0.4, zorder=4))

    regular = [poi for poi in model.pois if not poi.is_landmark]
    if regular:
        ax.scatter([p.position.x for p in regular], [p.position.y for p in regular],
                   c="#1a1a1a", s=3, zorder=5)
    for poi in model.pois:
        if poi.is_landmark:
            ax.scatter([poi.position.x], [poi.position.y], marker="*", s=200,
                       c="#c0392b", edgecolors="black", zorder=6)
            ax.annotate(poi.properties.name, (poi.position.x, poi.position.y),
                        textcoords="offset points", xytext=(6, 6), fontsize=9)

    legend_elements = [patches.Patch(facecolor=ZONE_COLORS[t], edgecolor="black",
                                     label=t.name.title())
                       for t in sorted({z.type for z in model.zones})]
    if legend_elements:
        ax.legend(handles=legend_elements, loc="upper left", bbox_to_anchor=(1.02, 1), fontsize=9)

    ax.set_xlim(b.min_x, b.max_x)
    ax.set_ylim(b.min_y, b.max_y)
    ax.set_aspect("equal")
    meta = model.metadata
    ax.set_title(f"{meta.terrain_profile} | Seed: {meta.seed}", fontsize=14, fontweight="bold")

    plt.tight_layout()
    plt.savefig(filename, bbox_inches="tight", dpi=120)
    plt.close(fig)
    logger.info(f"Saved city map as {filename}")
    return filename
