"""
Tree-walking interpreter for RoboLang programs.

Provides the `Interpreter` class, which executes a parsed "program" ASTNode against
a robot implementing the `Robot` protocol.

Execution Model:
    - Statements run strictly in order. After every statement the interpreter
      polls `robot.is_dead()`; once the robot is dead, the current block stops
      and reports `Outcome.HALTED`, and every enclosing block, loop, while and
      if stops in turn.
    - "loop" has no exit condition of its own: it repeats its body until the
      robot dies or an action raises RobotInterrupted.
    - "while" re-evaluates its condition before every iteration.
    - RobotInterrupted raised by the robot is never caught here; it unwinds the
      whole walk to the caller of `run()`.

Dispatch:
    Statements dispatch to `exec_<kind>` and expressions to `eval_<kind>`.
    Action, sensor and relational-operator tags are looked up in fixed tables.
    A tag with no entry is an internal invariant violation, since the parser
    only ever builds known tags.

Example:
    >>> robot = TraceRobot(fuel=3)
    >>> Interpreter(robot).run(parse_source("move; turnL; wait;"))
    <Outcome.COMPLETED: 'completed'>
    >>> robot.calls
    ['move', 'turn_left', 'idle_wait']
"""

import enum
import logging
import operator
from typing import Callable

from robo.robo_ast import ASTNode
from robo.robo_robot import Robot

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Outcome(enum.Enum):
    """Result of executing a statement node."""

    COMPLETED = "completed"
    HALTED = "halted"


class InvariantViolation(AssertionError):
    """Raised when an AST node carries a tag the interpreter does not know.

    This signals a bug in whatever built the tree, not a problem with the
    program text.
    """


ACTION_CALLS: dict[str, Callable[[Robot], None]] = {
    "move": lambda robot: robot.move(),
    "turnL": lambda robot: robot.turn_left(),
    "turnR": lambda robot: robot.turn_right(),
    "turnAround": lambda robot: robot.turn_around(),
    "shieldOn": lambda robot: robot.set_shield(True),
    "shieldOff": lambda robot: robot.set_shield(False),
    "takeFuel": lambda robot: robot.take_fuel(),
    "wait": lambda robot: robot.idle_wait(),
}

SENSOR_READS: dict[str, Callable[[Robot], int]] = {
    "fuelLeft": lambda robot: robot.fuel(),
    "oppLR": lambda robot: robot.opponent_lr(),
    "oppFB": lambda robot: robot.opponent_fb(),
    "numBarrels": lambda robot: robot.num_barrels(),
    "barrelLR": lambda robot: robot.closest_barrel_lr(),
    "barrelFB": lambda robot: robot.closest_barrel_fb(),
    "wallDist": lambda robot: robot.wall_distance(),
}

INDEXED_SENSOR_READS: dict[str, Callable[[Robot, int], int]] = {
    "barrelLR": lambda robot, n: robot.barrel_lr(n),
    "barrelFB": lambda robot, n: robot.barrel_fb(n),
}

RELOP_FUNCS: dict[str, Callable[[int, int], bool]] = {
    "lt": operator.lt,
    "gt": operator.gt,
    "eq": operator.eq,
}


class Interpreter:
    """Executes RoboLang ASTs against a robot.

    Attributes:
        robot (Robot): The robot every action and sensor query is sent to.
    """

    def __init__(self, robot: Robot) -> None:
        self.robot = robot

    def run(self, program: ASTNode) -> Outcome:
        """Execute a whole program.

        Returns:
            Outcome.COMPLETED if every statement ran, Outcome.HALTED if the robot died.

        Raises:
            RobotInterrupted: Propagated unchanged from the robot.
            InvariantViolation: If the tree holds an unknown tag.
        """
        outcome = self.execute(program)
        if outcome is Outcome.HALTED:
            logger.debug("Program halted: robot is dead")
        return outcome

    def execute(self, node: ASTNode) -> Outcome:
        method = getattr(self, f"exec_{node.kind}", None)
        if method is None:
            raise InvariantViolation(
                f"Cannot execute node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        result: Outcome = method(node)
        return result

    def evaluate(self, node: ASTNode) -> int | bool:
        method = getattr(self, f"eval_{node.kind}", None)
        if method is None:
            raise InvariantViolation(
                f"Cannot evaluate node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        result: int | bool = method(node)
        return result

    # Statements

    def run_statements(self, statements: tuple[ASTNode, ...]) -> Outcome:
        for stmt in statements:
            if self.execute(stmt) is Outcome.HALTED or self.robot.is_dead():
                return Outcome.HALTED
        return Outcome.COMPLETED

    def exec_program(self, node: ASTNode) -> Outcome:
        return self.run_statements(node.children)

    def exec_block(self, node: ASTNode) -> Outcome:
        return self.run_statements(node.children)

    def exec_action(self, node: ASTNode) -> Outcome:
        call = ACTION_CALLS.get(str(node.value))
        if call is None:
            raise InvariantViolation(f"Unknown action: {node.value!r}")
        logger.debug("Action %s", node.value)
        call(self.robot)
        return Outcome.COMPLETED

    # Bodies of loop, while and if run through run_statements directly rather
    # than execute(block), keeping each nesting level to three stack frames.

    def exec_loop(self, node: ASTNode) -> Outcome:
        body = self.block_of(node, node.children)
        while not self.robot.is_dead():
            if self.run_statements(body) is Outcome.HALTED:
                break
        return Outcome.HALTED

    def exec_while(self, node: ASTNode) -> Outcome:
        cond = self.condition_of(node)
        body = self.block_of(node, node.children)
        while self.evaluate(cond):
            if self.run_statements(body) is Outcome.HALTED:
                return Outcome.HALTED
        return Outcome.COMPLETED

    def exec_if(self, node: ASTNode) -> Outcome:
        if self.evaluate(self.condition_of(node)):
            return self.run_statements(self.block_of(node, node.children))
        if node.else_children:
            return self.run_statements(self.block_of(node, node.else_children))
        return Outcome.COMPLETED

    def block_of(
        self, node: ASTNode, branches: tuple[ASTNode, ...]
    ) -> tuple[ASTNode, ...]:
        if len(branches) != 1 or branches[0].kind != "block":
            raise InvariantViolation(f"'{node.kind}' node has no body block")
        return branches[0].children

    def condition_of(self, node: ASTNode) -> ASTNode:
        cond = node.value
        if not isinstance(cond, ASTNode):
            raise InvariantViolation(f"'{node.kind}' node has no condition")
        return cond

    # Expressions

    def eval_compare(self, node: ASTNode) -> bool:
        func = RELOP_FUNCS.get(str(node.value))
        if func is None:
            raise InvariantViolation(f"Unknown relational operator: {node.value!r}")
        left = self.evaluate(node.children[0])
        right = self.evaluate(node.children[1])
        return func(int(left), int(right))

    def eval_sensor(self, node: ASTNode) -> int:
        name = str(node.value)
        if node.children:
            read_at = INDEXED_SENSOR_READS.get(name)
            if read_at is None:
                raise InvariantViolation(f"Sensor {name!r} does not take an index")
            return read_at(self.robot, int(self.evaluate(node.children[0])))

        read = SENSOR_READS.get(name)
        if read is None:
            raise InvariantViolation(f"Unknown sensor: {name!r}")
        return read(self.robot)

    def eval_number(self, node: ASTNode) -> int:
        if not isinstance(node.value, int) or isinstance(node.value, bool):
            raise InvariantViolation(f"Number node holds {node.value!r}")
        return node.value


def run_program(program: ASTNode, robot: Robot) -> Outcome:
    """Execute `program` against `robot`."""
    return Interpreter(robot).run(program)


__all__ = ["InvariantViolation", "Interpreter", "Outcome", "run_program"]
