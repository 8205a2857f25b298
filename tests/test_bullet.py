import pytest

from catdefense.bullet import CannonBullet, FireBullet, GunBullet, MageBullet, create_bullet
from catdefense.enemy import Enemy1, Enemy5
from catdefense.level import GamePath
from catdefense.positions import Point
from catdefense.scheduler import Scheduler


class FakeGame:
    def __init__(self):
        self.scheduler = Scheduler()
        self.enemies = []
        self.bullets = []
        self.gold = 0

    def home_damaged(self):
        pass

    def award_money(self, amount):
        self.gold += amount

    def remove_enemy(self, enemy):
        self.enemies.remove(enemy)

    def remove_bullet(self, bullet):
        self.bullets.remove(bullet)


def spawn(game, row=0, cls=Enemy5):
    path = GamePath(Point(0, row), Point(3, row), [Point(0, row), Point(3, row)])
    enemy = cls(path, game)
    game.enemies.append(enemy)
    return enemy


def fire(bullet):
    bullet.game.bullets.append(bullet)
    bullet.launch()
    return bullet


@pytest.mark.parametrize(
    "kind, cls", [(1, GunBullet), (2, MageBullet), (3, FireBullet), (4, CannonBullet)]
)
def test_create_bullet_kinds(kind, cls):
    bullet = create_bullet(kind, Point(0, 0), Point(1, 1), 5, None, FakeGame())
    assert type(bullet) is cls
    assert bullet.kind == kind


def test_create_bullet_rejects_unknown_kind():
    with pytest.raises(ValueError):
        create_bullet(5, Point(0, 0), Point(1, 1), 5, None, FakeGame())


def test_gun_bullet_hits_after_flight():
    game = FakeGame()
    enemy = spawn(game)
    bullet = fire(GunBullet(Point(0, 0), enemy.center(), 50, enemy, game))
    game.scheduler.advance(199)
    assert enemy.health == enemy.max_health
    game.scheduler.advance(1)
    assert enemy.health == enemy.max_health - 50
    assert bullet not in game.bullets


def test_position_interpolates():
    game = FakeGame()
    bullet = fire(GunBullet(Point(0, 0), Point(100, 0), 1, None, game))
    assert bullet.position == Point(0, 0)
    game.scheduler.advance(100)
    assert bullet.position == Point(50, 0)


def test_missing_target_only_removes_bullet():
    game = FakeGame()
    gone = spawn(game)
    game.enemies.remove(gone)
    bullet = fire(GunBullet(Point(0, 0), gone.center(), 50, gone, game))
    game.scheduler.advance(200)
    assert gone.health == gone.max_health
    assert game.bullets == []
    assert bullet.position == gone.center()


def test_mage_bullet_slows_and_damages():
    game = FakeGame()
    enemy = spawn(game)
    speed = enemy.speed
    fire(MageBullet(Point(0, 0), enemy.center(), 30, enemy, game))
    game.scheduler.advance(200)
    assert enemy.speed == speed - 2
    assert enemy.health == enemy.max_health - 30


def test_fire_bullet_burns_over_time():
    game = FakeGame()
    enemy = spawn(game)
    fire(FireBullet(Point(0, 0), enemy.center(), 0, enemy, game, fire_value=20))
    game.scheduler.advance(200)
    assert enemy.health == enemy.max_health
    game.scheduler.advance(1000)
    assert enemy.health == enemy.max_health - 20


def test_cannon_bullet_splashes_nearby_only():
    game = FakeGame()
    near = spawn(game, row=0)
    far = spawn(game, row=5)
    fire(CannonBullet(Point(0, 0), near.center(), 100, near, game))
    game.scheduler.advance(200)
    assert near.health == near.max_health - 100
    assert far.health == far.max_health


def test_cannon_bullet_kills_several():
    game = FakeGame()
    first = spawn(game, row=0, cls=Enemy1)
    second = spawn(game, row=0, cls=Enemy1)
    fire(CannonBullet(Point(0, 0), first.center(), 500, first, game))
    game.scheduler.advance(200)
    assert game.enemies == []
    assert game.gold == first.value + second.value