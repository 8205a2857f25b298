"""Cat towers that pick a target in range and fire at it on a timer."""

from __future__ import annotations

from typing import Any, ClassVar

from .bullet import Bullet, create_bullet
from .positions import TILE_SIZE, Point, TowerPosition
from .scheduler import RepeatingTimer

MAX_LEVEL = 3
UPGRADE_STEP = 150


class Tower:
    """A tower standing on a tower position; ``game`` supplies scheduler and callbacks."""

    KIND: ClassVar[int] = 0
    NAME: ClassVar[str] = ""
    VALUE: ClassVar[int] = 100
    UPGRADE_COST: ClassVar[int] = 150
    HEALTH: ClassVar[int] = 500
    ATTACK_VALUE: ClassVar[int] = 50
    ATTACK_RATE: ClassVar[int] = 500
    FIRE_VALUE: ClassVar[int] = 0
    ATTACK_RANGE: ClassVar[int] = 200

    def __init__(self, position: TowerPosition, game: Any) -> None:
        self.position = position
        self.cell = position.pos
        self.game = game
        self.kind = self.KIND
        self.level = 1
        self.self_value = self.VALUE
        self.upgrade_cost = self.UPGRADE_COST
        self.health = self.HEALTH
        self.attack_value = self.ATTACK_VALUE
        self.attack_rate = self.ATTACK_RATE
        self.fire_value = self.FIRE_VALUE
        self.attack_range = self.ATTACK_RANGE
        self.target: Any = None
        self.selected = True
        self.fire_timer = RepeatingTimer(game.scheduler, self.shoot, self)

    def center(self) -> Point:
        half = TILE_SIZE // 2
        return Point(self.cell.x * TILE_SIZE + half, self.cell.y * TILE_SIZE + half)

    def image_name(self) -> str:
        """Sprite for the current level; empty for a tower without a look."""
        if not self.NAME or not 1 <= self.level <= MAX_LEVEL:
            return ""
        return f"image/Cat/{self.NAME}_{self.level}.png"

    def can_upgrade(self) -> bool:
        return self.level < MAX_LEVEL and self.game.gold >= self.upgrade_cost

    def upgrade(self) -> bool:
        """Raise the level by one; return False when already at the top level."""
        if self.level >= MAX_LEVEL:
            return False
        self.level += 1
        self.upgrade_cost += UPGRADE_STEP
        return True

    def sell(self) -> None:
        """Refund half the tower's value and take it off the field."""
        self.game.award_money(self.self_value // 2)
        self.selected = False
        if self.target is not None:
            self.lose_sight()
        self.fire_timer.stop()
        if any(tower is self for tower in self.game.towers):
            self.game.remove_tower(self)

    def take_damage(self, amount: int) -> None:
        self.health -= amount

    def shoot(self) -> Bullet | None:
        """Fire one bullet at the current target, if the tower has a weapon and a target."""
        if self.target is None or not 1 <= self.kind <= 4:
            return None
        bullet = create_bullet(
            self.kind,
            self.center(),
            self.target.center(),
            self.attack_value,
            self.target,
            self.game,
            self.fire_value,
        )
        bullet.launch()
        self.game.add_bullet(bullet)
        return bullet

    def check_enemy_in_range(self) -> None:
        """Drop a target that left the range, or pick the first active enemy in range."""
        if self.target is not None:
            if not self.in_range(self.target.center()):
                self.lose_sight()
            return
        for enemy in self.game.enemies:
            if self.in_range(enemy.center()) and enemy.active:
                self.choose_target(enemy)
                break

    def choose_target(self, enemy: Any) -> None:
        self.target = enemy
        self.fire_timer.start(self.attack_rate)
        enemy.add_attacker(self)

    def lose_sight(self) -> None:
        if self.target is not None:
            self.target.remove_attacker(self)
        self.target = None
        self.fire_timer.stop()

    def target_killed(self) -> None:
        self.target = None
        self.fire_timer.stop()

    def in_range(self, point: Point) -> bool:
        return self.center().distance_to(point) <= self.attack_range

    def contains(self, point: Point) -> bool:
        """Whether a pixel lies strictly inside the tower's cell."""
        left, top = self.cell.x * TILE_SIZE, self.cell.y * TILE_SIZE
        return left < point.x < left + TILE_SIZE and top < point.y < top + TILE_SIZE


class _CatTower(Tower):
    """A tower whose upgrades cost gold and change its stats."""

    LEVEL_STATS: ClassVar[dict[int, dict[str, int]]] = {}

    def upgrade(self) -> bool:
        if self.level >= MAX_LEVEL:
            return False
        self.game.lose_gold(self.upgrade_cost)
        self.level += 1
        self.self_value += self.upgrade_cost
        self.upgrade_cost += UPGRADE_STEP
        for name, value in self.LEVEL_STATS.get(self.level, {}).items():
            setattr(self, name, value)
        return True


class GunCat(_CatTower):
    KIND = 1
    NAME = "GunCat"
    LEVEL_STATS = {
        2: {"attack_rate": 400, "attack_value": 60},
        3: {"attack_range": 250, "attack_value": 70},
    }


class MageCat(_CatTower):
    KIND = 2
    NAME = "MageCat"
    VALUE = 150
    UPGRADE_COST = 150
    LEVEL_STATS = {
        2: {"attack_rate": 400, "attack_value": 60},
        3: {"attack_range": 250, "attack_value": 70},
    }


class FireCat(_CatTower):
    KIND = 3
    NAME = "FireCat"
    VALUE = 150
    UPGRADE_COST = 150
    ATTACK_RATE = 1000
    ATTACK_VALUE = 0
    FIRE_VALUE = 20
    LEVEL_STATS = {
        2: {"attack_rate": 800, "fire_value": 30},
        3: {"attack_range": 250, "fire_value": 40},
    }


class CannonCat(_CatTower):
    KIND = 4
    NAME = "CannonCat"
    VALUE = 200
    UPGRADE_COST = 200
    ATTACK_VALUE = 100
    ATTACK_RATE = 1000
    ATTACK_RANGE = 250
    LEVEL_STATS = {
        2: {"attack_rate": 800, "attack_value": 120},
        3: {"attack_rate": 700, "attack_value": 150},
    }


_KINDS: dict[int, type[Tower]] = {1: GunCat, 2: MageCat, 3: FireCat, 4: CannonCat}


def create_tower(kind: int, position: TowerPosition, game: Any) -> Tower:
    """Build a tower of kind 1 to 4."""
    try:
        cls = _KINDS[kind]
    except KeyError:
        raise ValueError(f"no such tower kind: {kind}") from None
    return cls(position, game)