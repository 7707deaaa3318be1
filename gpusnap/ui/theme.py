"""Dashboard colours for gpusnap."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class GpusnapTheme:
    """Colours for GPU cards, thermal badges and the memory chart."""

    name: str
    text_color: str
    card_color: str
    muted_color: str
    memory_used_color: str
    memory_free_color: str
    thermal_colors: Dict[str, str] = field(default_factory=dict)

    def thermal_color(self, state: str) -> str:
        """Colour for a thermal state; unknown states use the muted colour."""
        return self.thermal_colors.get(state, self.muted_color)


DARK_THEME = GpusnapTheme(
    name="dark",
    text_color="#E6E9EF",
    card_color="#1A1F2B",
    muted_color="#8D99AE",
    memory_used_color="#76B900",
    memory_free_color="#3A4356",
    thermal_colors={"green": "#66BB6A", "amber": "#FFB300", "red": "#EF5350"},
)

LIGHT_THEME = GpusnapTheme(
    name="light",
    text_color="#1A2233",
    card_color="#FFFFFF",
    muted_color="#5C6B7A",
    memory_used_color="#4E7F00",
    memory_free_color="#CFD8DC",
    thermal_colors={"green": "#2E7D32", "amber": "#F9A825", "red": "#C62828"},
)
