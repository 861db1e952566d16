"""Shunting-yard evaluation of scanned token sequences.

Evaluation runs in two phases over the same token list. ``validate_tokens``
rejects structurally broken input with a typed error; ``evaluate`` then runs
a single left-to-right pass keeping an operand stack and an operator stack.
``execute`` runs both and is the entry point used by the calculator.

Before either phase the tokens are annotated with their role in context:
whether a ``|`` opens or closes an absolute value group, and whether a
``mod`` written before ``(`` is a call of the two-argument ``mod`` function
rather than the infix operator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Mapping, Sequence

from .logging_config import get_logger
from .number import Number
from .scanner import (
    Bracket,
    BracketToken,
    Comma,
    FactorialSign,
    IdToken,
    NumberToken,
    Operator,
    OperatorToken,
    Token,
)
from .types import (
    InvalidArguments,
    InvalidToken,
    MissingOperand,
    MissingOperator,
)

if TYPE_CHECKING:
    from .calculator import Variable

logger = get_logger("engine")


class _Kind(Enum):
    NUMBER = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BAR = auto()
    CLOSE_BAR = auto()
    FACTORIAL = auto()
    COMMA = auto()
    OPERATOR = auto()
    IDENTIFIER = auto()


# Kinds after which a complete value stands on the left
_ENDS_VALUE = frozenset(
    {_Kind.NUMBER, _Kind.CLOSE_PAREN, _Kind.CLOSE_BAR, _Kind.FACTORIAL}
)
# Kinds that begin a new value
_STARTS_VALUE = frozenset(
    {_Kind.NUMBER, _Kind.OPEN_PAREN, _Kind.OPEN_BAR, _Kind.IDENTIFIER}
)
# Kinds that can never directly follow an operator
_AFTER_OPERATOR_FORBIDDEN = frozenset(
    {_Kind.CLOSE_PAREN, _Kind.CLOSE_BAR, _Kind.COMMA, _Kind.FACTORIAL}
)

_SIGNS = (Operator.PLUS, Operator.MINUS)

# (precedence, right associative)
_BINARY_OPERATORS: dict[Operator, tuple[int, bool]] = {
    Operator.PLUS: (0, False),
    Operator.MINUS: (0, False),
    Operator.MULTIPLY: (1, False),
    Operator.DIVIDE: (1, False),
    Operator.MODULO: (2, False),
    Operator.POWER: (2, True),
}
_UNARY_PRECEDENCE = 3

_MOD_FUNCTION = "mod"


@dataclass(frozen=True)
class _Item:
    token: Token
    kind: _Kind


def _kind_of(token: Token) -> _Kind:
    if isinstance(token, NumberToken):
        return _Kind.NUMBER
    if isinstance(token, BracketToken):
        if token.bracket is Bracket.PAREN_LEFT:
            return _Kind.OPEN_PAREN
        if token.bracket is Bracket.PAREN_RIGHT:
            return _Kind.CLOSE_PAREN
        # Bars are resolved by _annotate
        return _Kind.OPEN_BAR
    if isinstance(token, FactorialSign):
        return _Kind.FACTORIAL
    if isinstance(token, Comma):
        return _Kind.COMMA
    if isinstance(token, OperatorToken):
        return _Kind.OPERATOR
    if isinstance(token, IdToken):
        return _Kind.IDENTIFIER
    raise InvalidToken(f"Unexpected token {token!r}")


def _is_paren_left(token: Token | None) -> bool:
    return isinstance(token, BracketToken) and token.bracket is Bracket.PAREN_LEFT


def _annotate(tokens: Sequence[Token]) -> list[_Item]:
    """Resolve the contextual role of every token.

    A vertical line closes the innermost group when that group is a bar
    group and a value precedes it; otherwise it opens a new group. A modulo
    operator in prefix position directly before ``(`` becomes a call of the
    ``mod`` function.
    """
    items: list[_Item] = []
    groups: list[_Kind] = []
    after_value = False
    for index, token in enumerate(tokens):
        kind = _kind_of(token)
        if kind is _Kind.OPEN_PAREN:
            groups.append(_Kind.OPEN_PAREN)
        elif kind is _Kind.CLOSE_PAREN:
            if groups and groups[-1] is _Kind.OPEN_PAREN:
                groups.pop()
        elif kind is _Kind.OPEN_BAR:
            if after_value and groups and groups[-1] is _Kind.OPEN_BAR:
                groups.pop()
                kind = _Kind.CLOSE_BAR
            else:
                groups.append(_Kind.OPEN_BAR)
        elif (
            kind is _Kind.OPERATOR
            and token.operator is Operator.MODULO
            and not after_value
            and _is_paren_left(tokens[index + 1] if index + 1 < len(tokens) else None)
        ):
            token = IdToken(_MOD_FUNCTION)
            kind = _Kind.IDENTIFIER
        items.append(_Item(token, kind))
        after_value = kind in _ENDS_VALUE
    return items


@dataclass
class _Frame:
    """An open bracket while validating: a plain group, a bar group or a call."""

    kind: str
    name: str | None = None
    argc: int = 0
    commas: int = 0
    slot_empty: bool = True


def _describe(item: _Item) -> str:
    return str(item.token)


class _UnaryMinus:
    precedence = _UNARY_PRECEDENCE


@dataclass(frozen=True)
class _BinaryOp:
    operator: Operator

    @property
    def precedence(self) -> int:
        return _BINARY_OPERATORS[self.operator][0]

    @property
    def right_associative(self) -> bool:
        return _BINARY_OPERATORS[self.operator][1]


@dataclass
class _Group:
    """Operator stack marker of an open bracket.

    ``floor`` is the operand stack height when the group was opened; the
    operators inside the group may not consume operands below it.
    """

    kind: _Kind
    floor: int
    name: str | None = None
    variable: Variable | None = None


_StackEntry = _UnaryMinus | _BinaryOp | _Group

_UNARY_MINUS = _UnaryMinus()


@dataclass
class _Evaluation:
    """Operand and operator stacks of one ``evaluate`` run."""

    values: list[Number] = field(default_factory=list)
    operators: list[_StackEntry] = field(default_factory=list)

    def floor(self) -> int:
        for entry in reversed(self.operators):
            if isinstance(entry, _Group):
                return entry.floor
        return 0

    def push_operator(self, op: _BinaryOp) -> None:
        while self.operators:
            top = self.operators[-1]
            if isinstance(top, _Group):
                break
            if top.precedence > op.precedence or (
                top.precedence == op.precedence and not op.right_associative
            ):
                self.apply_top()
            else:
                break
        self.operators.append(op)

    def apply_unary(self) -> None:
        """Apply the prefix signs sitting on top of the operator stack."""
        while self.operators and self.operators[-1] is _UNARY_MINUS:
            self.apply_top()

    def apply_top(self) -> None:
        entry = self.operators.pop()
        if entry is _UNARY_MINUS:
            # A sign without an operand stands for a sign applied to zero
            operand = self.values.pop() if len(self.values) > self.floor() else Number.zero()
            self.values.append(-operand)
            return
        if len(self.values) - self.floor() < 2:
            raise MissingOperand(f"Missing operand for '{entry.operator.value}'")
        right = self.values.pop()
        left = self.values.pop()
        self.values.append(_apply_binary(entry.operator, left, right))

    def close_group(self, kind: _Kind) -> _Group:
        """Apply operators down to the innermost group marker and pop it."""
        while self.operators and not isinstance(self.operators[-1], _Group):
            self.apply_top()
        if not self.operators or self.operators[-1].kind is not kind:
            raise InvalidToken("Unbalanced brackets")
        return self.operators.pop()

    def pop_value(self) -> Number:
        if len(self.values) <= self.floor():
            raise MissingOperand()
        return self.values.pop()


def _apply_binary(operator: Operator, left: Number, right: Number) -> Number:
    if operator is Operator.PLUS:
        return left.add(right)
    if operator is Operator.MINUS:
        return left.sub(right)
    if operator is Operator.MULTIPLY:
        return left.mul(right)
    if operator is Operator.DIVIDE:
        return left.div(right)
    if operator is Operator.MODULO:
        return left.modulo(right)
    return left.power(right)


class ShuntingYardEngine:
    """Validate and evaluate token sequences against a name to Variable map.

    The engine holds no state between calls; one instance can serve any
    number of calculators.
    """

    def execute(
        self, tokens: Sequence[Token], variables: Mapping[str, Variable]
    ) -> Number:
        """Validate ``tokens`` and evaluate them.

        Raises:
            ValidationError: the token sequence is not a well-formed expression
            CalculationError: a numeric operation failed during evaluation
        """
        self.validate_tokens(tokens, variables)
        return self.evaluate(tokens, variables)

    def validate_tokens(
        self, tokens: Sequence[Token], variables: Mapping[str, Variable]
    ) -> None:
        """Check the structure of ``tokens`` without computing anything.

        Raises:
            MissingOperand: empty input, an operator without an operand,
                an empty bracket or argument slot
            MissingOperator: two numbers or two bracket groups side by side
            InvalidToken: unknown identifier, identifier not followed by ``(``,
                unbalanced brackets, a comma outside a function call
            InvalidArguments: argument count differs from the function arity
        """
        items = _annotate(tokens)
        if not items:
            raise MissingOperand("Empty expression")

        frames: list[_Frame] = []
        pending_call: tuple[str, int] | None = None
        previous: _Item | None = None

        def mark_slot() -> None:
            if frames:
                frames[-1].slot_empty = False

        for index, item in enumerate(items):
            following = items[index + 1] if index + 1 < len(items) else None
            kind = item.kind
            prev_kind = previous.kind if previous is not None else None

            if kind in _STARTS_VALUE and prev_kind in _ENDS_VALUE:
                if kind is _Kind.NUMBER and prev_kind is _Kind.NUMBER:
                    raise MissingOperator(
                        f"Missing operator between '{_describe(previous)}' and '{_describe(item)}'"
                    )
                if kind is _Kind.OPEN_PAREN and prev_kind is _Kind.CLOSE_PAREN:
                    raise MissingOperator("Missing operator between ')' and '('")

            if kind is _Kind.NUMBER:
                mark_slot()

            elif kind is _Kind.IDENTIFIER:
                name = item.token.name.lower()
                variable = variables.get(name)
                if variable is None:
                    raise InvalidToken(f"Unknown identifier '{item.token.name}'")
                if following is None or following.kind is not _Kind.OPEN_PAREN:
                    raise InvalidToken(f"'{item.token.name}' must be followed by '('")
                pending_call = (name, variable.argc)
                mark_slot()

            elif kind is _Kind.OPEN_PAREN:
                mark_slot()
                if pending_call is not None:
                    name, argc = pending_call
                    frames.append(_Frame("call", name=name, argc=argc))
                    pending_call = None
                else:
                    frames.append(_Frame("paren"))

            elif kind is _Kind.CLOSE_PAREN:
                if not frames or frames[-1].kind == "bar":
                    raise InvalidToken("Unbalanced ')'")
                frame = frames.pop()
                if frame.kind == "paren":
                    if frame.slot_empty:
                        raise MissingOperand("Empty brackets")
                elif frame.argc == 0:
                    if not frame.slot_empty or frame.commas:
                        raise InvalidArguments(
                            f"'{frame.name}' takes no arguments"
                        )
                else:
                    if frame.slot_empty:
                        raise MissingOperand(f"Missing argument of '{frame.name}'")
                    if frame.commas + 1 != frame.argc:
                        raise InvalidArguments(
                            f"'{frame.name}' takes {frame.argc} argument(s), "
                            f"got {frame.commas + 1}"
                        )

            elif kind is _Kind.OPEN_BAR:
                mark_slot()
                frames.append(_Frame("bar"))

            elif kind is _Kind.CLOSE_BAR:
                # _annotate only closes a bar that is the innermost group
                frame = frames.pop()
                if frame.slot_empty:
                    raise MissingOperand("Empty absolute value")

            elif kind is _Kind.COMMA:
                if not frames or frames[-1].kind != "call":
                    raise InvalidToken("',' outside of a function call")
                if frames[-1].slot_empty:
                    raise MissingOperand(f"Missing argument of '{frames[-1].name}'")
                frames[-1].commas += 1
                frames[-1].slot_empty = True

            elif kind is _Kind.FACTORIAL:
                if prev_kind not in _ENDS_VALUE:
                    raise MissingOperand("Missing operand for '!'")

            else:
                operator = item.token.operator
                if operator not in _SIGNS and prev_kind not in _ENDS_VALUE:
                    raise MissingOperand(f"Missing operand for '{operator.value}'")
                if following is None or following.kind in _AFTER_OPERATOR_FORBIDDEN:
                    raise MissingOperand(f"Missing operand for '{operator.value}'")
                if (
                    following.kind is _Kind.OPERATOR
                    and following.token.operator not in _SIGNS
                ):
                    raise MissingOperand(
                        f"Missing operand for '{following.token.operator.value}'"
                    )
                mark_slot()

            previous = item

        if frames:
            raise InvalidToken("Unbalanced brackets")

    def evaluate(
        self, tokens: Sequence[Token], variables: Mapping[str, Variable]
    ) -> Number:
        """Compute the value of a validated token sequence.

        Errors the validator would have reported are still raised as typed
        errors if ``tokens`` was not validated first.
        """
        items = _annotate(tokens)
        logger.debug(f"Evaluating {len(items)} tokens")
        state = _Evaluation()
        previous_kind: _Kind | None = None
        index = 0

        while index < len(items):
            item = items[index]
            kind = item.kind

            if kind in _STARTS_VALUE and previous_kind in _ENDS_VALUE:
                state.push_operator(_BinaryOp(Operator.MULTIPLY))

            if kind is _Kind.NUMBER:
                state.values.append(item.token.value)

            elif kind is _Kind.IDENTIFIER:
                name = item.token.name.lower()
                variable = variables.get(name)
                if variable is None:
                    raise InvalidToken(f"Unknown identifier '{item.token.name}'")
                if variable.argc == 0:
                    if (
                        index + 2 >= len(items)
                        or items[index + 1].kind is not _Kind.OPEN_PAREN
                        or items[index + 2].kind is not _Kind.CLOSE_PAREN
                    ):
                        raise InvalidArguments(f"'{name}' takes no arguments")
                    state.values.append(variable.calc(()))
                    index += 3
                    previous_kind = _Kind.CLOSE_PAREN
                    continue
                if index + 1 >= len(items) or items[index + 1].kind is not _Kind.OPEN_PAREN:
                    raise InvalidToken(f"'{item.token.name}' must be followed by '('")
                state.operators.append(
                    _Group(_Kind.OPEN_PAREN, len(state.values), name, variable)
                )
                index += 2
                previous_kind = _Kind.OPEN_PAREN
                continue

            elif kind is _Kind.OPEN_PAREN or kind is _Kind.OPEN_BAR:
                state.operators.append(_Group(kind, len(state.values)))

            elif kind is _Kind.CLOSE_PAREN:
                group = state.close_group(_Kind.OPEN_PAREN)
                if group.variable is not None:
                    arguments = state.values[group.floor:]
                    del state.values[group.floor:]
                    if len(arguments) != group.variable.argc:
                        raise InvalidArguments(
                            f"'{group.name}' takes {group.variable.argc} argument(s), "
                            f"got {len(arguments)}"
                        )
                    logger.debug(f"Calling {group.name} with {len(arguments)} argument(s)")
                    state.values.append(group.variable.calc(arguments))
                elif len(state.values) == group.floor:
                    raise MissingOperand("Empty brackets")

            elif kind is _Kind.CLOSE_BAR:
                group = state.close_group(_Kind.OPEN_BAR)
                if len(state.values) == group.floor:
                    raise MissingOperand("Empty absolute value")
                state.values.append(state.values.pop().abs())

            elif kind is _Kind.COMMA:
                while state.operators and not isinstance(state.operators[-1], _Group):
                    state.apply_top()
                if not state.operators or state.operators[-1].variable is None:
                    raise InvalidToken("',' outside of a function call")

            elif kind is _Kind.FACTORIAL:
                state.apply_unary()
                state.values.append(state.pop_value().factorial())

            else:
                # Fold a run of signs into one effective sign
                operator = item.token.operator
                if operator in _SIGNS:
                    negative = False
                    while (
                        index < len(items)
                        and items[index].kind is _Kind.OPERATOR
                        and items[index].token.operator in _SIGNS
                    ):
                        negative ^= items[index].token.operator is Operator.MINUS
                        index += 1
                    if previous_kind in _ENDS_VALUE:
                        state.push_operator(
                            _BinaryOp(Operator.MINUS if negative else Operator.PLUS)
                        )
                    elif (
                        negative
                        and index < len(items)
                        and items[index].kind is _Kind.NUMBER
                    ):
                        state.values.append(-items[index].token.value)
                        index += 1
                        previous_kind = _Kind.NUMBER
                        continue
                    elif negative:
                        state.operators.append(_UNARY_MINUS)
                    previous_kind = _Kind.OPERATOR
                    continue
                if previous_kind not in _ENDS_VALUE:
                    raise MissingOperand(f"Missing operand for '{operator.value}'")
                state.push_operator(_BinaryOp(operator))

            previous_kind = kind
            index += 1

        while state.operators:
            if isinstance(state.operators[-1], _Group):
                raise InvalidToken("Unbalanced brackets")
            state.apply_top()

        if not state.values:
            raise MissingOperand("Empty expression")
        if len(state.values) > 1:
            raise MissingOperator()
        return state.values[0]
