"""Enemies walking along a path towards the player's home."""

from __future__ import annotations

import math
from typing import Any

from .level import GamePath
from .positions import TILE_SIZE, Point

FLASH_MS = 100
SLOW_MS = 200
SLOW_AMOUNT = 2
BURN_TICKS = 5
BURN_INTERVAL_MS = 1000
ARRIVAL_DISTANCE = 10
START_OFFSET = 30
SPRITE_SIZE = 100


def _qround(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def _pixel(cell: Point) -> Point:
    return Point(cell.x * TILE_SIZE, cell.y * TILE_SIZE)


class Enemy:
    """An enemy that follows a path; the game supplies a scheduler and callbacks."""

    MAX_HEALTH = 200
    SPEED = 4
    ATTACK_VALUE = 0
    ATTACK_RANGE = 0
    ATTACK_RATE = 0
    VALUE = 50
    IMAGE = ""
    BLOOD_IMAGE = ""

    def __init__(self, path: GamePath, game: Any) -> None:
        if len(path.waypoints) < 2:
            raise ValueError("an enemy path needs at least two waypoints")
        self.path = path
        self.game = game
        self.active = False
        self.alive = True
        self.max_health = self.MAX_HEALTH
        self.health = self.MAX_HEALTH
        self.speed = self.SPEED
        self.attack_value = self.ATTACK_VALUE
        self.attack_range = self.ATTACK_RANGE
        self.attack_rate = self.ATTACK_RATE
        self.value = self.VALUE
        self.image = self.IMAGE
        self.blood_image = self.BLOOD_IMAGE
        self.attackers: list[Any] = []
        self.index = 0

        start, following = path.start, path.waypoints[1]
        x, y = start.x * TILE_SIZE, start.y * TILE_SIZE
        if following.x > start.x:
            x -= START_OFFSET
        elif following.x < start.x:
            x += START_OFFSET
        elif following.y < start.y:
            y += START_OFFSET
        elif following.y > start.y:
            y -= START_OFFSET
        self.position = Point(x, y)
        self.destination = _pixel(path.waypoints[self.index])

    @property
    def health_ratio(self) -> float:
        return self.health / self.max_health

    def center(self) -> Point:
        half = SPRITE_SIZE // 2
        return Point(self.position.x + half, self.position.y + half)

    def activate(self) -> None:
        self.active = True

    def move(self) -> None:
        """Take one step towards the next waypoint, or reach home at the end."""
        if not self.active:
            return
        if self.reached_waypoint():
            self.index += 1
            if self.index < len(self.path.waypoints):
                self.destination = _pixel(self.path.waypoints[self.index])
            else:
                self.game.home_damaged()
                self.remove()
            return
        delta = self.destination - self.position
        length = math.hypot(delta.x, delta.y)
        if length == 0:
            return
        step_x = _qround(_qround(delta.x / length) * self.speed)
        step_y = _qround(_qround(delta.y / length) * self.speed)
        self.position = self.position + Point(step_x, step_y)

    def reached_waypoint(self) -> bool:
        return int(self.position.distance_to(self.destination)) <= ARRIVAL_DISTANCE

    def take_damage(self, amount: int) -> None:
        if not self.alive:
            return
        self.flash()
        self.health -= amount
        self.check_removal()

    def add_attacker(self, tower: Any) -> None:
        self.attackers.append(tower)

    def remove_attacker(self, tower: Any) -> None:
        if tower in self.attackers:
            self.attackers.remove(tower)

    def check_removal(self) -> bool:
        """Die and pay the bounty once health runs out."""
        if self.health <= 0:
            self.game.award_money(self.value)
            self.remove()
            return True
        return False

    def remove(self) -> None:
        self.alive = False
        for attacker in list(self.attackers):
            attacker.target_killed()
        self.game.scheduler.cancel_owner(self)
        self.game.remove_enemy(self)

    def flash(self) -> None:
        """Show the wounded sprite briefly."""
        previous = self.image
        self.image = self.blood_image

        def restore() -> None:
            self.image = previous

        self.game.scheduler.call_later(FLASH_MS, restore, self)

    def slow_down(self) -> None:
        if self.speed < SLOW_AMOUNT:
            return
        self.speed -= SLOW_AMOUNT

        def recover() -> None:
            self.speed += SLOW_AMOUNT

        self.game.scheduler.call_later(SLOW_MS, recover, self)

    def burn(self, fire_damage: int) -> None:
        """Deal ``fire_damage`` once a second for five seconds."""
        for tick in range(1, BURN_TICKS + 1):
            self.game.scheduler.call_later(
                BURN_INTERVAL_MS * tick, lambda: self.take_damage(fire_damage), self
            )


class Enemy1(Enemy):
    IMAGE = "image/Enemy/enemy1.png"
    BLOOD_IMAGE = "image/Enemy/enemy1blood.png"


class Enemy2(Enemy):
    SPEED = 6
    MAX_HEALTH = 150
    ATTACK_VALUE = 30
    IMAGE = "image/Enemy/enemy2.png"
    BLOOD_IMAGE = "image/Enemy/enemy2blood.png"


class Enemy3(Enemy):
    VALUE = 70
    ATTACK_RATE = 700
    MAX_HEALTH = 300
    IMAGE = "image/Enemy/enemy3.png"
    BLOOD_IMAGE = "image/Enemy/enemy3blood.png"


class Enemy4(Enemy):
    VALUE = 80
    MAX_HEALTH = 500
    SPEED = 5
    ATTACK_VALUE = 80
    IMAGE = "image/Enemy/enemy4.png"
    BLOOD_IMAGE = "image/Enemy/enemy4blood.png"


class Enemy5(Enemy):
    VALUE = 100
    MAX_HEALTH = 1000
    SPEED = 5
    ATTACK_VALUE = 90
    IMAGE = "image/Enemy/enemy5.png"
    BLOOD_IMAGE = "image/Enemy/enemy5blood.png"


_KINDS: dict[int, type[Enemy]] = {1: Enemy1, 2: Enemy2, 3: Enemy3, 4: Enemy4, 5: Enemy5}


def create_enemy(kind: int, path: GamePath, game: Any) -> Enemy:
    """Build an enemy of kind 1 to 5."""
    try:
        cls = _KINDS[kind]
    except KeyError:
        raise ValueError(f"no such enemy kind: {kind}") from None
    return cls(path, game)