import pytest

from catdefense.enemy import Enemy1, Enemy2, Enemy5, create_enemy
from catdefense.level import GamePath
from catdefense.positions import Point
from catdefense.scheduler import Scheduler


class FakeGame:
    def __init__(self):
        self.scheduler = Scheduler()
        self.enemies = []
        self.gold = 0
        self.home_hits = 0

    def home_damaged(self):
        self.home_hits += 1

    def award_money(self, amount):
        self.gold += amount

    def remove_enemy(self, enemy):
        self.enemies.remove(enemy)


class FakeTower:
    def __init__(self):
        self.killed = 0

    def target_killed(self):
        self.killed += 1


def straight_path():
    return GamePath(Point(0, 0), Point(2, 0), [Point(0, 0), Point(2, 0)])


def spawn(cls=Enemy1):
    game = FakeGame()
    enemy = cls(straight_path(), game)
    game.enemies.append(enemy)
    return game, enemy


def test_starts_behind_start_cell():
    _, enemy = spawn()
    assert enemy.position == Point(-30, 0)
    assert enemy.destination == Point(0, 0)


def test_kind_stats():
    _, fast = spawn(Enemy2)
    _, boss = spawn(Enemy5)
    assert (fast.speed, fast.health, fast.max_health) == (6, 150, 150)
    assert boss.value == 100
    assert boss.health == 1000


def test_create_enemy_picks_class_and_rejects_unknown():
    game = FakeGame()
    assert isinstance(create_enemy(2, straight_path(), game), Enemy2)
    with pytest.raises(ValueError):
        create_enemy(6, straight_path(), game)


def test_inactive_enemy_does_not_move():
    _, enemy = spawn()
    before = enemy.position
    enemy.move()
    assert enemy.position == before


def test_walks_to_end_and_hurts_home():
    game, enemy = spawn()
    enemy.activate()
    for _ in range(500):
        if not enemy.alive:
            break
        enemy.move()
    assert game.home_hits == 1
    assert enemy not in game.enemies
    assert game.gold == 0


def test_step_moves_towards_destination():
    _, enemy = spawn()
    enemy.activate()
    before = enemy.position.distance_to(enemy.destination)
    enemy.move()
    assert enemy.position.distance_to(enemy.destination) == before - enemy.speed


def test_damage_flashes_then_restores():
    game, enemy = spawn()
    enemy.take_damage(20)
    assert enemy.health == enemy.max_health - 20
    assert enemy.image == enemy.blood_image
    game.scheduler.advance(100)
    assert enemy.image == Enemy1.IMAGE


def test_kill_awards_value_and_notifies_attackers():
    game, enemy = spawn()
    tower = FakeTower()
    enemy.add_attacker(tower)
    enemy.take_damage(enemy.max_health)
    assert game.gold == enemy.value
    assert tower.killed == 1
    assert enemy not in game.enemies
    assert not enemy.alive


def test_remove_attacker():
    _, enemy = spawn()
    tower = FakeTower()
    enemy.add_attacker(tower)
    enemy.remove_attacker(tower)
    enemy.remove_attacker(tower)
    assert enemy.attackers == []


def test_slow_down_recovers():
    game, enemy = spawn()
    enemy.slow_down()
    assert enemy.speed == Enemy1.SPEED - 2
    game.scheduler.advance(200)
    assert enemy.speed == Enemy1.SPEED


def test_burn_deals_five_ticks():
    game, enemy = spawn(Enemy5)
    enemy.burn(10)
    game.scheduler.advance(999)
    assert enemy.health == enemy.max_health
    game.scheduler.advance(5000)
    assert enemy.health == enemy.max_health - 5 * 10


def test_burn_stops_after_death():
    game, enemy = spawn()
    enemy.burn(enemy.max_health)
    game.scheduler.advance(10000)
    assert game.gold == enemy.value
    assert len(game.scheduler) == 0


def test_reached_waypoint_threshold():
    _, enemy = spawn()
    enemy.position = Point(-10, 0)
    assert enemy.reached_waypoint()
    enemy.position = Point(-11, 0)
    assert not enemy.reached_waypoint()


def test_path_needs_two_waypoints():
    with pytest.raises(ValueError):
        Enemy1(GamePath(Point(0, 0), Point(0, 0), [Point(0, 0)]), FakeGame())