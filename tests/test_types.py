from renjuai.game.types import Player, Point


def test_player_other():
    assert Player.BLACK.other is Player.WHITE
    assert Player.WHITE.other is Player.BLACK
    assert Player.BLACK.other.other is Player.BLACK


def test_player_str():
    assert str(Player.BLACK) == "Black"
    assert str(Player.WHITE) == "White"


def test_point_is_namedtuple():
    p = Point(3, 5)
    assert p.row == 3
    assert p.col == 5
    assert p == Point(3, 5)


def test_chebyshev_distance():
    assert Point(8, 8).chebyshev(Point(8, 8)) == 0
    assert Point(8, 8).chebyshev(Point(10, 9)) == 2
    assert Point(1, 1).chebyshev(Point(4, 2)) == 3


def test_point_step():
    assert Point(8, 8).step(1, 0) == Point(9, 8)
    assert Point(8, 8).step(1, -1, 3) == Point(11, 5)
    assert Point(8, 8).step(-1, -1, 2) == Point(6, 6)
