import math
from dataclasses import dataclass


@dataclass
class GridModifiers:
    """Tweakable grid and shot parameters.

    Central store for values that affect the grid engine. Every function that
    needs a radius, a column count or a tuning constant takes it as an
    argument and defaults to the global instance below.
    """

    # Lattice geometry
    bubble_radius: float = 20.0
    grid_cols: int = 12  # 480 / 40: even rows fit exactly
    grid_rows: int = 20

    # Playfield
    canvas_width: float = 480.0
    canvas_height: float = 720.0
    shooter_offset: float = 50.0
    death_line_offset: float = 100.0

    # Shots
    projectile_speed: float = 12.0
    collision_forgiveness: float = 4.0
    aim_margin: float = 0.2  # radians kept clear of the horizon

    # Rules
    min_cluster: int = 3
    initial_rows: int = 5
    penalty_rows: int = 2
    item_chance: float = 0.01

    def __post_init__(self) -> None:
        if self.bubble_radius <= 0:
            raise ValueError("bubble_radius must be positive")
        if self.grid_cols < 2:
            raise ValueError("grid_cols must be >= 2 so odd rows have a column")
        if self.collision_forgiveness < 0 or self.collision_forgiveness >= 2 * self.bubble_radius:
            raise ValueError("collision_forgiveness must lie in [0, 2*bubble_radius)")
        if self.projectile_speed <= 0:
            raise ValueError("projectile_speed must be positive")
        if not 0.0 <= self.aim_margin < math.pi / 2:
            raise ValueError(f"aim_margin {self.aim_margin!r} outside [0, pi/2)")
        if not 0.0 <= self.item_chance <= 1.0:
            raise ValueError(f"item_chance {self.item_chance!r} outside [0, 1]")
        if self.min_cluster < 1:
            raise ValueError("min_cluster must be >= 1")
        if self.penalty_rows <= 0 or self.penalty_rows % 2:
            raise ValueError("penalty_rows must be a positive even number")

    @property
    def shooter_y(self) -> float:
        return self.canvas_height - self.shooter_offset

    @property
    def shooter_origin(self) -> tuple[float, float]:
        return (self.canvas_width / 2, self.shooter_y)

    @property
    def death_line_y(self) -> float:
        return self.shooter_y - self.death_line_offset


# Global modifiers instance used throughout the codebase
MODIFIERS = GridModifiers()
