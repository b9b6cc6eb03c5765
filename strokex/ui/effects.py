"""Cosmetic effects driven by engine events: particles, shake, dots, fades.

Nothing here touches Qt or puzzle state, so the effects can be stepped and
inspected on their own.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from strokex.core.levels import Position
from strokex.core.session import EngineEvent, GameEvent
from strokex.ui.colors import DOT_COLORS, PARTICLE_COLORS


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: str
    size: float
    lifetime: float
    max_lifetime: float

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifetime / self.max_lifetime)


class ParticleEmitter:
    """Sparks left behind the pointer while a stroke is drawn."""

    SPAWN_SPACING = 10.0
    PER_SPAWN = 3
    DAMPING = 0.95

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._particles: List[Particle] = []
        self._last_spawn: Optional[Position] = None

    @property
    def particles(self) -> List[Particle]:
        return self._particles

    def anchor(self, position: Position) -> None:
        """Set the reference point for spacing without spawning."""
        self._last_spawn = position

    def spawn(self, position: Position) -> int:
        """Emit a burst at ``position`` unless it is too close to the last one."""
        if self._last_spawn is not None:
            if math.dist(self._last_spawn, position) < self.SPAWN_SPACING:
                return 0
        self._last_spawn = position
        for _ in range(self.PER_SPAWN):
            angle = math.radians(self._rng.randint(0, 360))
            speed = float(self._rng.randint(20, 60))
            lifetime = self._rng.randint(30, 80) / 100.0
            self._particles.append(
                Particle(
                    x=position[0],
                    y=position[1],
                    vx=math.cos(angle) * speed,
                    vy=math.sin(angle) * speed,
                    color=self._rng.choice(PARTICLE_COLORS),
                    size=float(self._rng.randint(3, 7)),
                    lifetime=lifetime,
                    max_lifetime=lifetime,
                )
            )
        return self.PER_SPAWN

    def update(self, dt: float) -> None:
        alive: List[Particle] = []
        for p in self._particles:
            p.lifetime -= dt
            if p.lifetime <= 0:
                continue
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.vx *= self.DAMPING
            p.vy *= self.DAMPING
            alive.append(p)
        self._particles = alive

    def clear(self) -> None:
        self._particles.clear()
        self._last_spawn = None


class ScreenShake:
    """Decaying random offset applied to the board after a failed stroke."""

    DURATION = 0.5
    INTENSITY = 10.0

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._timer = 0.0
        self._offset: Tuple[float, float] = (0.0, 0.0)

    @property
    def active(self) -> bool:
        return self._timer > 0

    @property
    def offset(self) -> Tuple[float, float]:
        return self._offset

    def trigger(self) -> None:
        self._timer = self.DURATION

    def stop(self) -> None:
        self._timer = 0.0
        self._offset = (0.0, 0.0)

    def update(self, dt: float) -> None:
        if self._timer <= 0:
            return
        self._timer -= dt
        if self._timer <= 0:
            self.stop()
            return
        angle = math.radians(self._rng.randint(0, 360))
        intensity = self.INTENSITY * (self._timer / self.DURATION)
        self._offset = (math.cos(angle) * intensity, math.sin(angle) * intensity)


@dataclass
class Dot:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: str


class BouncingDots:
    """Start-screen background: dots drifting and bouncing off the edges."""

    def __init__(self, width: float = 1880, height: float = 1060, count: int = 100,
                 rng: Optional[random.Random] = None) -> None:
        self.width = width
        self.height = height
        rng = rng or random.Random()
        self.dots: List[Dot] = []
        for i in range(count):
            speed = 0.5 + (i % 10) * 0.1
            angle = (i * 37) / 10.0
            self.dots.append(
                Dot(
                    x=float(rng.randint(0, int(width))),
                    y=float(rng.randint(0, int(height))),
                    vx=math.cos(angle) * speed,
                    vy=math.sin(angle) * speed,
                    size=4.0 + (i % 5),
                    color=DOT_COLORS[i % len(DOT_COLORS)],
                )
            )

    def step(self) -> None:
        # one step per frame, velocities are in pixels per frame
        for dot in self.dots:
            dot.x += dot.vx
            dot.y += dot.vy
            if dot.x <= 0 or dot.x >= self.width:
                dot.vx = -dot.vx
                dot.x = 0.0 if dot.x <= 0 else float(self.width)
            if dot.y <= 0 or dot.y >= self.height:
                dot.vy = -dot.vy
                dot.y = 0.0 if dot.y <= 0 else float(self.height)


class Fade:
    """Alpha that ramps toward 1 while shown and back to 0 when hidden."""

    RATE = 4.0

    def __init__(self) -> None:
        self.visible = False
        self.alpha = 0.0

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def update(self, dt: float) -> None:
        if self.visible:
            self.alpha = min(1.0, self.alpha + dt * self.RATE)
        else:
            self.alpha = max(0.0, self.alpha - dt * self.RATE)

    @property
    def drawn(self) -> bool:
        return self.visible or self.alpha > 0


class BoardEffects:
    """Routes engine events to the particle emitter and the screen shake."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.particles = ParticleEmitter(rng)
        self.shake = ScreenShake(rng)

    def __call__(self, event: GameEvent) -> None:
        if event.kind is EngineEvent.STARTED and event.position is not None:
            self.particles.clear()
            self.particles.anchor(event.position)
        elif event.kind is EngineEvent.FAILED:
            self.shake.trigger()
        elif event.kind in (EngineEvent.RESET, EngineEvent.LEVEL_LOADED):
            self.particles.clear()
            self.shake.stop()

    def trail(self, position: Position) -> None:
        self.particles.spawn(position)

    def update(self, dt: float) -> None:
        self.particles.update(dt)
        self.shake.update(dt)
