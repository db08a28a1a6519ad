"""Restrições declarativas de folhas do schema.

Uma restrição é um predicado nomeado sobre o valor já tipado. O nome é
estável e aparece literalmente em `ConstraintError.constraint`.

Notas:
- Restrições nunca convertem valores; rodam apenas após a coerção.
- Em arquivos de schema, restrições são declaradas como string
  (`positive`) ou mapa de uma chave (`{min: 1}`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .errors import SchemaDefinitionError


@dataclass(frozen=True)
class Constraint:
    """Predicado nomeado aplicado a um valor de folha."""

    name: str
    check: Callable[[Any], bool]

    def __call__(self, value: Any) -> bool:
        return bool(self.check(value))


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def positive() -> Constraint:
    return Constraint("positive", lambda v: _is_number(v) and v > 0)


def non_negative() -> Constraint:
    return Constraint("non_negative", lambda v: _is_number(v) and v >= 0)


def non_empty() -> Constraint:
    return Constraint("non_empty", lambda v: isinstance(v, str) and bool(v.strip()))


def min_value(bound: float) -> Constraint:
    return Constraint(f"min={bound}", lambda v: _is_number(v) and v >= bound)


def max_value(bound: float) -> Constraint:
    return Constraint(f"max={bound}", lambda v: _is_number(v) and v <= bound)


def one_of(*choices: Any) -> Constraint:
    allowed = tuple(choices)
    label = ",".join(str(c) for c in allowed)
    return Constraint(f"one_of={label}", lambda v: v in allowed)


_NAMED = {
    "positive": positive,
    "non_negative": non_negative,
    "non_empty": non_empty,
}

_PARAMETRIZED = {
    "min": min_value,
    "max": max_value,
}


def constraint_from_spec(spec: Any) -> Constraint:
    """Materializa uma restrição a partir da forma declarada em arquivo.

    Formas aceitas:
        - "positive" | "non_negative" | "non_empty"
        - {"min": x} | {"max": x}
        - {"choices": [a, b, ...]}

    Raises:
        SchemaDefinitionError: se a forma não for reconhecida.
    """
    if isinstance(spec, Constraint):
        return spec

    if isinstance(spec, str):
        factory = _NAMED.get(spec)
        if factory is None:
            raise SchemaDefinitionError(f"restrição desconhecida: {spec!r}")
        return factory()

    if isinstance(spec, dict) and len(spec) == 1:
        (key, arg), = spec.items()
        if key in _PARAMETRIZED:
            if not _is_number(arg):
                raise SchemaDefinitionError(f"restrição '{key}' requer número, recebido: {arg!r}")
            return _PARAMETRIZED[key](arg)
        if key == "choices":
            if not isinstance(arg, list) or not arg:
                raise SchemaDefinitionError("restrição 'choices' requer lista não vazia")
            return one_of(*arg)

    raise SchemaDefinitionError(f"restrição desconhecida: {spec!r}")
