import pytest

from robo.robo_constants import DEFAULT_FUEL, FUEL_PICKUP, NO_BARREL
from robo.robo_robot import NoSuchBarrel, RobotInterrupted, TraceRobot


def test_defaults() -> None:
    robot = TraceRobot()
    assert robot.fuel() == DEFAULT_FUEL
    assert robot.calls == []
    assert robot.shield is False
    assert not robot.is_dead()
    assert robot.num_barrels() == 0
    assert robot.opponent_lr() == robot.opponent_fb() == robot.wall_distance() == 0


def test_move_spends_fuel_until_dead() -> None:
    robot = TraceRobot(fuel=2, move_cost=1)
    robot.move()
    assert robot.fuel() == 1
    assert not robot.is_dead()
    robot.move()
    assert robot.is_dead()


def test_move_cost() -> None:
    robot = TraceRobot(fuel=10, move_cost=4)
    robot.move()
    robot.move()
    assert robot.fuel() == 2


def test_turns_and_wait_are_free() -> None:
    robot = TraceRobot(fuel=1)
    robot.turn_left()
    robot.turn_right()
    robot.turn_around()
    robot.idle_wait()
    assert robot.fuel() == 1
    assert robot.calls == ["turn_left", "turn_right", "turn_around", "idle_wait"]


def test_shield() -> None:
    robot = TraceRobot()
    robot.set_shield(True)
    assert robot.shield is True
    robot.set_shield(False)
    assert robot.calls == ["shield_on", "shield_off"]
    assert robot.shield is False


def test_take_fuel_picks_closest_barrel() -> None:
    robot = TraceRobot(fuel=5, barrels=[(4, 4), (0, 1)])
    robot.take_fuel()
    assert robot.fuel() == 5 + FUEL_PICKUP
    assert robot.barrels == [(4, 4)]
    robot.take_fuel()
    robot.take_fuel()
    assert robot.fuel() == 5 + 2 * FUEL_PICKUP
    assert robot.num_barrels() == 0


def test_sensor_table() -> None:
    robot = TraceRobot(sensors={"oppLR": -3, "oppFB": 7, "wallDist": 2})
    assert (robot.opponent_lr(), robot.opponent_fb(), robot.wall_distance()) == (
        -3,
        7,
        2,
    )


def test_barrel_bearings() -> None:
    robot = TraceRobot(barrels=[(2, -9), (1, 1)])
    assert robot.closest_barrel_lr() == 1
    assert robot.closest_barrel_fb() == 1
    assert robot.barrel_lr(0) == 2
    assert robot.barrel_fb(0) == -9


def test_no_barrels_closest_sentinel() -> None:
    robot = TraceRobot()
    assert robot.closest_barrel_lr() == NO_BARREL
    assert robot.closest_barrel_fb() == NO_BARREL


@pytest.mark.parametrize("index", [-1, 1, 50])  # type: ignore[misc]
def test_barrel_index_out_of_range(index: int) -> None:
    robot = TraceRobot(barrels=[(0, 0)])
    with pytest.raises(NoSuchBarrel, match=f"No barrel with index {index}"):
        robot.barrel_lr(index)
    with pytest.raises(NoSuchBarrel):
        robot.barrel_fb(index)


def test_missing_barrel_is_an_index_error() -> None:
    assert issubclass(NoSuchBarrel, IndexError)


def test_max_actions_interrupts() -> None:
    robot = TraceRobot(max_actions=2)
    robot.move()
    robot.idle_wait()
    with pytest.raises(RobotInterrupted, match="after 2 actions"):
        robot.turn_left()
    assert robot.calls == ["move", "idle_wait"]


def test_sensor_reads_are_not_actions() -> None:
    robot = TraceRobot(max_actions=0, barrels=[(1, 2)])
    robot.fuel()
    robot.num_barrels()
    robot.closest_barrel_lr()
    robot.is_dead()
    assert robot.calls == []
