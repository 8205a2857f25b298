"""One level in play: gold, home health, waves of enemies and the towers defending."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from .bullet import Bullet
from .enemy import Enemy, create_enemy
from .level import MapData, Tile, build_grid
from .positions import Point
from .scheduler import RepeatingTimer, Scheduler
from .tower import Tower, create_tower

TICK_MS = 30
START_DELAY_MS = 3000
START_GOLD = 500
HOME_HP = 10
WAVE_COUNT = 6
TOWER_COSTS = {1: 100, 2: 150, 3: 150, 4: 200}


@dataclass(frozen=True)
class Spawn:
    """An enemy of ``kind`` entering on road ``road`` after ``delay_ms``."""

    delay_ms: int
    kind: int
    road: int


@dataclass(frozen=True)
class _WaveRule:
    first_ms: int
    last_ms: int
    step: tuple[int, int]
    pick_kind: Callable[[random.Random], int]


def _uniform(highest: int) -> Callable[[random.Random], int]:
    def pick(rng: random.Random) -> int:
        return rng.randrange(1, highest + 1)

    return pick


def _weighted(*bands: tuple[int, int], default: int) -> Callable[[random.Random], int]:
    """Roll 1-10 and take the first band whose upper bound covers the roll."""

    def pick(rng: random.Random) -> int:
        roll = rng.randrange(1, 11)
        return next((kind for upper, kind in bands if roll <= upper), default)

    return pick


_WAVES = (
    _WaveRule(3000, 20000, (800, 3000), _uniform(2)),
    _WaveRule(6000, 40000, (400, 3000), _uniform(3)),
    _WaveRule(6000, 60000, (400, 3000), _weighted((2, 1), (5, 2), default=3)),
    _WaveRule(6000, 80000, (100, 3000), _weighted((2, 1), (4, 2), (7, 3), default=4)),
    _WaveRule(6000, 100000, (100, 3000), _weighted((1, 1), (2, 2), (5, 3), (7, 4), default=5)),
    _WaveRule(6000, 120000, (100, 3000), _weighted((1, 1), (2, 2), (4, 3), (6, 4), default=5)),
)


def wave_spawns(wave: int, road_count: int, rng: random.Random) -> list[Spawn]:
    """Plan the enemies of a wave (0 to 5) spread over ``road_count`` roads."""
    if not 0 <= wave < len(_WAVES):
        raise ValueError(f"no such wave: {wave}")
    if road_count <= 0:
        raise ValueError("a wave needs at least one road")
    rule = _WAVES[wave]
    spawns = []
    time = rule.first_ms
    while time <= rule.last_ms:
        kind = rule.pick_kind(rng)
        road = rng.randrange(0, road_count)
        spawns.append(Spawn(time, kind, road))
        time += rng.randrange(*rule.step)
    return spawns


class Game:
    """State and rules of a running level, driven by a simulated clock."""

    def __init__(
        self,
        map_data: MapData,
        level: int = 1,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.map_data = map_data
        self.level = level
        self.rng = rng if rng is not None else random.Random()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.grid: list[list[Tile]] = build_grid(map_data)
        self.enemies: list[Enemy] = []
        self.towers: list[Tower] = []
        self.bullets: list[Bullet] = []
        self.gold = START_GOLD
        self.home_hp = HOME_HP
        self.wave = 0
        self.choice = 1
        self.won = False
        self.lost = False
        self.paused = False
        self._ticker = RepeatingTimer(self.scheduler, self.tick, self)
        self._ticker.start(TICK_MS)
        self.scheduler.call_later(START_DELAY_MS, self.start, self)

    @property
    def over(self) -> bool:
        return self.won or self.lost

    def start(self) -> None:
        """Send in the first wave."""
        self.load_wave()

    def choose(self, kind: int) -> None:
        """Pick the tower kind the next click places; 0 picks none."""
        if kind != 0 and kind not in TOWER_COSTS:
            raise ValueError(f"no such tower kind: {kind}")
        if self.paused:
            return
        self.choice = kind

    def click(self, point: Point) -> Tower | None:
        """Place the chosen tower on a free spot, and select the tower under the point."""
        placed = None
        if self.choice and not self.paused:
            for spot in self.map_data.tower_positions:
                if spot.occupied or not spot.contains(point):
                    continue
                cost = TOWER_COSTS[self.choice]
                if self.gold >= cost:
                    placed = create_tower(self.choice, spot, self)
                    self.gold -= cost
                    self.towers.append(placed)
                    spot.occupied = True
                    self.choice = 0
                break
        clicked = None
        if not self.paused:
            clicked = next((tower for tower in self.towers if tower.contains(point)), None)
        for tower in self.towers:
            tower.selected = tower is clicked
        return placed

    def home_damaged(self) -> None:
        if self.home_hp > 0:
            self.home_hp -= 1
        if self.home_hp == 0:
            self.lost = True
            self._end()

    def award_money(self, amount: int) -> None:
        self.gold += amount

    def lose_gold(self, amount: int) -> None:
        self.gold -= amount

    def remove_enemy(self, enemy: Enemy) -> None:
        """Take an enemy off the field; clearing the field brings the next wave or victory."""
        if not any(other is enemy for other in self.enemies):
            return
        self.enemies = [other for other in self.enemies if other is not enemy]
        if self.enemies or self.lost:
            return
        self.wave += 1
        if not self.load_wave():
            self.won = True
            self._end()

    def load_wave(self) -> bool:
        """Queue the current wave's enemies; False once every wave has been played."""
        if self.wave >= WAVE_COUNT:
            return False
        paths = self.map_data.paths
        for spawn in wave_spawns(self.wave, len(paths), self.rng):
            enemy = create_enemy(spawn.kind, paths[spawn.road], self)
            self.enemies.append(enemy)
            self.scheduler.call_later(spawn.delay_ms, enemy.activate, enemy)
        return True

    def add_bullet(self, bullet: Bullet) -> None:
        self.bullets.append(bullet)

    def remove_bullet(self, bullet: Bullet) -> None:
        self.bullets = [other for other in self.bullets if other is not bullet]

    def remove_tower(self, tower: Tower) -> None:
        tower.position.occupied = False
        self.towers = [other for other in self.towers if other is not tower]

    def tick(self) -> None:
        """Move every enemy one step, then let each tower look for a target."""
        for enemy in list(self.enemies):
            if enemy.alive:
                enemy.move()
        for tower in list(self.towers):
            tower.check_enemy_in_range()

    def advance(self, ms: int) -> None:
        """Let ``ms`` milliseconds of play pass; time stands still while paused."""
        if self.paused:
            return
        self.scheduler.advance(ms)

    def pause(self) -> None:
        self.paused = True
        for tower in self.towers:
            tower.selected = False
        self.tick()
        self._ticker.stop()

    def resume(self) -> None:
        """Continue a paused game; a finished game stays stopped."""
        if self.over:
            return
        self.paused = False
        self.tick()
        self._ticker.start(TICK_MS)

    def _end(self) -> None:
        self.paused = True
        for tower in self.towers:
            tower.selected = False
        self._ticker.stop()