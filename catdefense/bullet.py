"""Projectiles fired by towers, each with its own effect on impact."""

from __future__ import annotations

from typing import Any

from .positions import Point

FLIGHT_MS = 200
SPLASH_RADIUS = 100
BULLET_SIZE = 15


class Bullet:
    """A shot flying in a straight line from ``start`` to ``target_point``."""

    KIND = 0
    IMAGE = ""

    def __init__(
        self,
        start: Point,
        target_point: Point,
        damage: int,
        target: Any,
        game: Any,
        fire_value: int = 0,
    ) -> None:
        self.start = start
        self.target_point = target_point
        self.damage = damage
        self.target = target
        self.game = game
        self.fire_value = fire_value
        self.slow_speed = 2
        self.kind = self.KIND
        self.image = self.IMAGE
        self._launched_at: int | None = None

    @property
    def position(self) -> Point:
        """Where the bullet is now along its flight."""
        if self._launched_at is None:
            return self.start
        elapsed = self.game.scheduler.now - self._launched_at
        t = min(1.0, max(0.0, elapsed / FLIGHT_MS))
        return Point(
            round(self.start.x + (self.target_point.x - self.start.x) * t),
            round(self.start.y + (self.target_point.y - self.start.y) * t),
        )

    def launch(self) -> None:
        """Start the flight; the bullet hits when it arrives."""
        self._launched_at = self.game.scheduler.now
        self.game.scheduler.call_later(FLIGHT_MS, self.hit_target, self)

    def hit_target(self) -> None:
        if any(enemy is self.target for enemy in self.game.enemies):
            self.apply()
        self.game.remove_bullet(self)

    def apply(self) -> None:
        if self.target is not None:
            self.target.take_damage(self.damage)


class GunBullet(Bullet):
    KIND = 1
    IMAGE = "image/Ammo/GunCatAmmo.png"


class MageBullet(Bullet):
    KIND = 2
    IMAGE = "image/Ammo/MageCatAmmo.png"

    def apply(self) -> None:
        if self.target is not None:
            self.target.slow_down()
            self.target.take_damage(self.damage)


class FireBullet(Bullet):
    KIND = 3
    IMAGE = "image/Ammo/FireCatAmmo.png"

    def apply(self) -> None:
        if self.target is not None:
            self.target.burn(self.fire_value)


class CannonBullet(Bullet):
    KIND = 4
    IMAGE = "image/Ammo/CannonCatAmmo.png"

    def apply(self) -> None:
        """Damage every enemy close to the point of impact."""
        for enemy in list(self.game.enemies):
            if not getattr(enemy, "alive", True):
                continue
            if enemy.center().distance_to(self.target_point) < SPLASH_RADIUS:
                enemy.take_damage(self.damage)


_KINDS: dict[int, type[Bullet]] = {1: GunBullet, 2: MageBullet, 3: FireBullet, 4: CannonBullet}


def create_bullet(
    kind: int,
    start: Point,
    target_point: Point,
    damage: int,
    target: Any,
    game: Any,
    fire_value: int = 0,
) -> Bullet:
    """Build the bullet fired by tower kind 1 to 4."""
    try:
        cls = _KINDS[kind]
    except KeyError:
        raise ValueError(f"no such bullet kind: {kind}") from None
    return cls(start, target_point, damage, target, game, fire_value)