"""
Robot capability interface consumed by the RoboLang interpreter.

Classes and Features:
    - Robot (Protocol): The actions, liveness query and sensor queries the
      interpreter needs. Real simulations implement it; the interpreter never
      touches robot state except through these calls.
    - RobotInterrupted: Raised by a robot from a blocking action to cancel the
      running program. The interpreter never catches it.
    - NoSuchBarrel: IndexError raised by barrel_lr/barrel_fb for an index
      outside the visible barrels.
    - TraceRobot: A small recording robot used by the CLI driver and the tests.
      It keeps a fuel counter, a fixed sensor table and a list of barrels, and
      can interrupt itself after a fixed number of actions.

Example:
    >>> robot = TraceRobot(fuel=2)
    >>> robot.move(); robot.move()
    >>> robot.calls, robot.is_dead()
    (['move', 'move'], True)
"""

from typing import Mapping, Protocol, Sequence

from robo.robo_constants import DEFAULT_FUEL, FUEL_PICKUP, NO_BARREL


class RobotInterrupted(Exception):
    """Raised by a robot to abort the program currently driving it."""


class NoSuchBarrel(IndexError):
    """Raised by an indexed barrel query for an index the robot cannot see."""


class Robot(Protocol):  # pragma: no cover
    """Protocol for every robot a RoboLang program can drive.

    Actions may block until the simulation has advanced and may raise
    RobotInterrupted. Sensor queries are pure reads returning integers.
    """

    def move(self) -> None: ...

    def turn_left(self) -> None: ...

    def turn_right(self) -> None: ...

    def turn_around(self) -> None: ...

    def set_shield(self, on: bool) -> None: ...

    def take_fuel(self) -> None: ...

    def idle_wait(self) -> None: ...

    def is_dead(self) -> bool: ...

    def fuel(self) -> int: ...

    def opponent_lr(self) -> int: ...

    def opponent_fb(self) -> int: ...

    def num_barrels(self) -> int: ...

    def closest_barrel_lr(self) -> int: ...

    def closest_barrel_fb(self) -> int: ...

    def barrel_lr(self, n: int) -> int: ...

    def barrel_fb(self, n: int) -> int: ...

    def wall_distance(self) -> int: ...


class TraceRobot:
    """Records every action it is asked to perform.

    Args:
        fuel: Starting fuel. The robot is dead once fuel drops to 0 or below.
        sensors: Fixed readings keyed by DSL sensor name ("oppLR", "oppFB",
            "wallDist"). Missing names read as 0.
        barrels: (lr, fb) bearings of the visible barrels.
        move_cost: Fuel spent by each move.
        max_actions: Interrupt the program on the action after this many.

    Attributes:
        calls (list[str]): Names of the actions performed, in order.
        shield (bool): Current shield state.
    """

    def __init__(
        self,
        fuel: int = DEFAULT_FUEL,
        sensors: Mapping[str, int] | None = None,
        barrels: Sequence[tuple[int, int]] | None = None,
        move_cost: int = 1,
        max_actions: int | None = None,
    ) -> None:
        self._fuel = fuel
        self.sensors: dict[str, int] = dict(sensors or {})
        self.barrels: list[tuple[int, int]] = list(barrels or [])
        self.move_cost = move_cost
        self.max_actions = max_actions
        self.calls: list[str] = []
        self.shield = False

    def _record(self, name: str) -> None:
        if self.max_actions is not None and len(self.calls) >= self.max_actions:
            raise RobotInterrupted(
                f"Robot interrupted after {self.max_actions} actions"
            )
        self.calls.append(name)

    def _closest(self) -> tuple[int, int] | None:
        if not self.barrels:
            return None
        return min(self.barrels, key=lambda b: abs(b[0]) + abs(b[1]))

    # Actions

    def move(self) -> None:
        self._record("move")
        self._fuel -= self.move_cost

    def turn_left(self) -> None:
        self._record("turn_left")

    def turn_right(self) -> None:
        self._record("turn_right")

    def turn_around(self) -> None:
        self._record("turn_around")

    def set_shield(self, on: bool) -> None:
        self._record("shield_on" if on else "shield_off")
        self.shield = on

    def take_fuel(self) -> None:
        self._record("take_fuel")
        closest = self._closest()
        if closest is not None:
            self.barrels.remove(closest)
            self._fuel += FUEL_PICKUP

    def idle_wait(self) -> None:
        self._record("idle_wait")

    # Liveness

    def is_dead(self) -> bool:
        return self._fuel <= 0

    # Sensors

    def fuel(self) -> int:
        return self._fuel

    def opponent_lr(self) -> int:
        return self.sensors.get("oppLR", 0)

    def opponent_fb(self) -> int:
        return self.sensors.get("oppFB", 0)

    def num_barrels(self) -> int:
        return len(self.barrels)

    def closest_barrel_lr(self) -> int:
        closest = self._closest()
        return NO_BARREL if closest is None else closest[0]

    def closest_barrel_fb(self) -> int:
        closest = self._closest()
        return NO_BARREL if closest is None else closest[1]

    def barrel_lr(self, n: int) -> int:
        if not 0 <= n < len(self.barrels):
            raise NoSuchBarrel(f"No barrel with index {n}")
        return self.barrels[n][0]

    def barrel_fb(self, n: int) -> int:
        if not 0 <= n < len(self.barrels):
            raise NoSuchBarrel(f"No barrel with index {n}")
        return self.barrels[n][1]

    def wall_distance(self) -> int:
        return self.sensors.get("wallDist", 0)


__all__ = ["NoSuchBarrel", "Robot", "RobotInterrupted", "TraceRobot"]
