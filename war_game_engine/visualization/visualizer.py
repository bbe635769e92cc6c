"""
Visualization module for War game engine.
Draws the map as a grid of territory tiles coloured by owning army.
"""

import math
import os
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch, Patch

from war_game_engine.core.map import Map, Faction


FACTION_COLORS = {
    Faction.BLUE: '#4169E1',      # Royal Blue
    Faction.RED: '#CD5C5C',       # Indian Red
    Faction.GREEN: '#90EE90',     # Light Green
    Faction.YELLOW: '#F0E68C',    # Khaki
    Faction.PINK: '#FFB6C1',      # Light Pink
    Faction.PURPLE: '#9370DB',    # Medium Purple
}

GRID_COLUMNS = 7


class MapVisualizer:
    """Renders a Map as a tile grid with troop counts."""

    def __init__(self, game_map: Map, figsize=(14, 9), columns: int = GRID_COLUMNS):
        self.game_map = game_map
        self.figsize = figsize
        self.columns = columns
        self.rows = math.ceil(len(game_map) / columns)
        self.fig = None
        self.ax = None

    def draw_map(self, title: Optional[str] = None, show_legend: bool = True):
        """Draw every territory; tiles run left to right, top to bottom in map order."""
        self.fig, self.ax = plt.subplots(figsize=self.figsize)
        self.ax.set_xlim(0, self.columns)
        self.ax.set_ylim(0, self.rows)
        self.ax.set_aspect('auto')
        self.ax.axis('off')

        for index, territory in enumerate(self.game_map):
            col = index % self.columns
            # Row 0 at the top
            row = self.rows - 1 - index // self.columns
            tile = FancyBboxPatch(
                (col + 0.05, row + 0.05), 0.9, 0.9,
                boxstyle="round,pad=0.02",
                facecolor=FACTION_COLORS[territory.faction],
                edgecolor='black',
                linewidth=1.0
            )
            self.ax.add_patch(tile)
            self.ax.text(col + 0.5, row + 0.65, f"{index + 1}. {territory.name}",
                         ha='center', va='center', fontsize=7, wrap=True)
            self.ax.text(col + 0.5, row + 0.3, str(territory.troops),
                         ha='center', va='center', fontsize=14, fontweight='bold')

        self._draw_title(title)
        if show_legend:
            self._draw_legend()

        plt.tight_layout()
        return self.fig

    def _draw_title(self, title: Optional[str]):
        if title is None:
            title = f"World Map - {len(self.game_map)} territories"
        self.ax.set_title(title, fontsize=14, fontweight='bold')

    def _draw_legend(self):
        handles = []
        for faction in Faction:
            count = self.game_map.count_controlled(faction)
            handles.append(Patch(facecolor=FACTION_COLORS[faction], edgecolor='black',
                                 label=f"{faction.value} ({count})"))
        self.ax.legend(handles=handles, loc='upper center', bbox_to_anchor=(0.5, -0.01),
                       ncol=len(handles), frameon=False)

    def show(self):
        """Display the map in a window."""
        if self.fig is None:
            self.draw_map()
        plt.show()

    def save(self, filename: str, dpi=150):
        """Save the drawn map to an image file."""
        if self.fig is None:
            self.draw_map()
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.fig.savefig(filename, dpi=dpi, bbox_inches='tight', facecolor='white')
        plt.close(self.fig)


def visualize_map(game_map: Map, filename: Optional[str] = None, title: Optional[str] = None):
    """
    Draw a map and either save it or show it.

    Args:
        game_map: The map to draw
        filename: Output image path; shows a window when omitted
        title: Optional figure title
    """
    viz = MapVisualizer(game_map)
    viz.draw_map(title=title)
    if filename:
        viz.save(filename)
    else:
        viz.show()
    return viz
