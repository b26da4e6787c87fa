"""Projectile launch and fixed-step flight."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from bubbles import BubbleColor
from modifiers import MODIFIERS


@dataclass
class Projectile:
    x: float
    y: float
    vx: float
    vy: float
    color: BubbleColor
    active: bool = True

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)


def aim_angle(origin: Tuple[float, float], target: Tuple[float, float],
              margin: float = MODIFIERS.aim_margin) -> Optional[float]:
    """Angle from ``origin`` toward ``target``, or ``None`` if not aimable.

    Screen y grows downward, so a valid shot has an angle in
    ``(-pi + margin, -margin)``.
    """
    angle = math.atan2(target[1] - origin[1], target[0] - origin[0])
    if angle > -margin or angle < -math.pi + margin:
        return None
    return angle


def launch(origin: Tuple[float, float], target: Tuple[float, float], color: BubbleColor,
           speed: float = MODIFIERS.projectile_speed,
           margin: float = MODIFIERS.aim_margin) -> Optional[Projectile]:
    angle = aim_angle(origin, target, margin)
    if angle is None:
        return None
    return Projectile(x=origin[0], y=origin[1],
                      vx=math.cos(angle) * speed, vy=math.sin(angle) * speed,
                      color=color)


def advance(p: Projectile, width: float = MODIFIERS.canvas_width,
            radius: float = MODIFIERS.bubble_radius) -> None:
    """Move one step, bouncing off the side walls."""
    p.x += p.vx
    p.y += p.vy
    if p.x < radius or p.x > width - radius:
        p.vx = -p.vx
        p.x = max(radius, min(width - radius, p.x))


def reached_ceiling(p: Projectile, radius: float = MODIFIERS.bubble_radius) -> bool:
    return p.y < radius
