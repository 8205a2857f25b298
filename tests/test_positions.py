from catdefense.positions import TILE_SIZE, Point, TowerPosition


def test_distance_three_four_five():
    assert Point(0, 0).distance_to(Point(3, 4)) == 5.0


def test_distance_symmetric_and_zero_to_self():
    a, b = Point(7, -2), Point(-3, 9)
    assert a.distance_to(b) == b.distance_to(a)
    assert a.distance_to(a) == 0


def test_point_arithmetic_round_trip():
    p, q = Point(12, 5), Point(-4, 30)
    assert p + q - q == p


def test_center_of_cell():
    assert TowerPosition(Point(2, 3)).center() == Point(250, 350)


def test_center_is_contained():
    spot = TowerPosition(Point(4, 1))
    assert spot.contains(spot.center())


def test_edges_are_not_contained():
    spot = TowerPosition(Point(2, 3))
    left = 2 * TILE_SIZE
    top = 3 * TILE_SIZE
    assert not spot.contains(Point(left, top + 10))
    assert not spot.contains(Point(left + TILE_SIZE, top + 10))
    assert not spot.contains(Point(left + 10, top))
    assert spot.contains(Point(left + 1, top + 1))
    assert spot.contains(Point(left + TILE_SIZE - 1, top + TILE_SIZE - 1))


def test_occupied_flag():
    spot = TowerPosition(Point(0, 0))
    assert spot.occupied is False
    spot.occupied = True
    assert spot.occupied is True