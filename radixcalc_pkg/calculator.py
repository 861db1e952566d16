"""Calculator: a registry of named constants and functions plus the evaluator.

Example:
    >>> calc = Calculator()
    >>> calc.evaluate("root(2, 64)")
    Number(8)
    >>> calc.add_constant("x", 5)
    True
    >>> calc.evaluate("2x() + ans()")
    Number(18)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from . import config
from .engine import ShuntingYardEngine
from .logging_config import get_logger
from .number import Number, NumberLike
from .scanner import tokenize
from .types import InvalidArguments, Message

logger = get_logger("calculator")

ANS = "ans"


@dataclass(frozen=True)
class Variable:
    """A named entry of the registry.

    Constants have ``argc == 0`` and carry a ``value``. Functions carry an
    ``implementation`` taking exactly ``argc`` Numbers.
    """

    argc: int
    value: Number | None = None
    implementation: Callable[..., Number] | None = None

    @classmethod
    def constant(cls, value: NumberLike) -> Variable:
        return cls(0, value=Number.from_value(value))

    @classmethod
    def function(cls, argc: int, implementation: Callable[..., Number]) -> Variable:
        return cls(argc, implementation=implementation)

    @property
    def is_constant(self) -> bool:
        return self.implementation is None

    def calc(self, args: Sequence[Number]) -> Number:
        if len(args) != self.argc:
            raise InvalidArguments(
                f"Expected {self.argc} argument(s), got {len(args)}"
            )
        if self.implementation is None:
            return self.value
        return self.implementation(*args)


_BUILTIN_FUNCTIONS: dict[str, Variable] = {
    "root": Variable.function(2, lambda n, x: x.root(n)),
    "sqrt": Variable.function(1, lambda x: x.sqrt()),
    "ln": Variable.function(1, lambda x: x.ln()),
    "log2": Variable.function(1, lambda x: x.log2()),
    "log10": Variable.function(1, lambda x: x.log10()),
    "log": Variable.function(2, lambda x, base: x.log(base)),
    "sin": Variable.function(1, lambda x: x.sin()),
    "cos": Variable.function(1, lambda x: x.cos()),
    "tg": Variable.function(1, lambda x: x.tg()),
    "cotg": Variable.function(1, lambda x: x.cotg()),
    "arcsin": Variable.function(1, lambda x: x.arcsin()),
    "arccos": Variable.function(1, lambda x: x.arccos()),
    "arctg": Variable.function(1, lambda x: x.arctg()),
    "arccotg": Variable.function(1, lambda x: x.arccotg()),
    "pow": Variable.function(2, lambda x, y: x.power(y)),
    "abs": Variable.function(1, lambda x: x.abs()),
    "comb": Variable.function(2, Number.combination),
    "random": Variable.function(0, Number.random),
    "mod": Variable.function(2, lambda a, b: a.modulo(b)),
}


class Calculator:
    """Stateful evaluator owning a name to Variable registry.

    Names are case-insensitive. Builtin functions and the constants ``e`` and
    ``pi`` are reserved and cannot be overwritten or removed. After every
    successful ``evaluate`` the result is stored as the constant ``ans``.

    Not safe for concurrent mutation; give each thread its own instance.
    """

    def __init__(self, engine: ShuntingYardEngine | None = None):
        self._engine = engine or ShuntingYardEngine()
        self._variables: dict[str, Variable] = dict(_BUILTIN_FUNCTIONS)
        self._variables["e"] = Variable.constant(Number.e())
        self._variables["pi"] = Variable.constant(Number.pi())
        self._reserved = frozenset(self._variables) | {"mod"}

    def evaluate(self, text: str) -> Number:
        """Evaluate ``text`` and remember the result as ``ans``.

        Raises:
            Message: input longer than MAX_INPUT_LENGTH
            MathError: any lexing, validation or calculation failure;
                the registry is left unchanged
        """
        if len(text) > config.MAX_INPUT_LENGTH:
            raise Message(f"Input too long (max {config.MAX_INPUT_LENGTH} characters)")
        tokens = tokenize(text)
        logger.debug(f"Scanned {len(tokens)} tokens from {text!r}")
        result = self._engine.execute(tokens, self._variables)
        self._variables[ANS] = Variable.constant(result)
        return result

    def validate(self, text: str) -> None:
        """Check that ``text`` is a well-formed expression without evaluating it."""
        if len(text) > config.MAX_INPUT_LENGTH:
            raise Message(f"Input too long (max {config.MAX_INPUT_LENGTH} characters)")
        self._engine.validate_tokens(tokenize(text), self._variables)

    def is_reserved(self, name: str) -> bool:
        return name.lower() in self._reserved

    def add_constant(self, name: str, value: NumberLike) -> bool:
        """Add or overwrite a user constant.

        Returns:
            False when ``name`` is reserved or not a valid identifier
        """
        if not config.VAR_NAME_RE.match(name) or self.is_reserved(name):
            logger.info(f"Rejected constant name {name!r}")
            return False
        key = name.lower()
        self._variables[key] = Variable.constant(value)
        logger.info(f"Constant {key} set")
        return True

    def remove_constant(self, name: str) -> Number | None:
        key = name.lower()
        if key in self._reserved:
            return None
        variable = self._variables.get(key)
        if variable is None or not variable.is_constant:
            return None
        del self._variables[key]
        logger.info(f"Constant {key} removed")
        return variable.value

    def get_constant(self, name: str) -> Number | None:
        variable = self._variables.get(name.lower())
        if variable is None or not variable.is_constant:
            return None
        return variable.value

    def constants(self) -> Iterator[tuple[str, Number]]:
        """Iterate over ``(name, value)`` of every constant, builtin ones included."""
        for name, variable in self._variables.items():
            if variable.is_constant:
                yield name, variable.value


def evaluate(text: str) -> Number:
    """Evaluate ``text`` with a fresh Calculator; nothing persists between calls."""
    return Calculator().evaluate(text)
