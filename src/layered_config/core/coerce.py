"""Coercer canônico: valor bruto → valor tipado da folha.

Regras:
  - bool: `true|1|yes` → True, `false|0|no` → False (sem distinção de caixa)
  - int: literal inteiro com sinal opcional, dentro de 64 bits com sinal
  - float: literal numérico finito
  - string: sem transformação

Notas:
  - Valores já tipados (vindos do parser de arquivo) passam como identidade
    quando o tipo corresponde; caso contrário são re-serializados por
    `render_value` e convertidos como string.
  - `True`/`False` nunca viram 1/0 em folhas numéricas.
  - Restrições de faixa declaradas no schema não são verificadas aqui
    (ver `validate`); apenas o limite físico do tipo.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict

from .errors import CoercionError
from .types import LeafType


TRUE_LITERALS = frozenset({"true", "1", "yes"})
FALSE_LITERALS = frozenset({"false", "0", "no"})

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def render_value(value: Any) -> str:
    """Serialização canônica de um escalar tipado para string bruta.

    O resultado sempre é aceito por `coerce` para o mesmo tipo, e
    `coerce(render_value(v), t) == v`.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (int, str)):
        return str(value)
    raise TypeError(f"valor não escalar: {type(value).__name__}")


def _coerce_bool(s: str) -> bool:
    lowered = s.strip().lower()
    if lowered in TRUE_LITERALS:
        return True
    if lowered in FALSE_LITERALS:
        return False
    raise CoercionError(raw_value=s, expected=LeafType.BOOL)


def _coerce_int(s: str) -> int:
    text = s.strip()
    digits = text[1:] if text.startswith(("+", "-")) else text
    # isdigit aceita dígitos unicode não-ASCII
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise CoercionError(raw_value=s, expected=LeafType.INT)
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        raise CoercionError(raw_value=s, expected=LeafType.INT, reason="fora da faixa de 64 bits")
    return value


def _coerce_float(s: str) -> float:
    text = s.strip()
    # float() aceita `1_000` e dígitos unicode; mesma regra de _coerce_int
    if not text.isascii() or "_" in text:
        raise CoercionError(raw_value=s, expected=LeafType.FLOAT)
    try:
        value = float(text)
    except ValueError:
        raise CoercionError(raw_value=s, expected=LeafType.FLOAT) from None
    if not math.isfinite(value):
        raise CoercionError(raw_value=s, expected=LeafType.FLOAT, reason="valor não finito")
    return value


def _coerce_string(s: str) -> str:
    return s


_PARSERS: Dict[LeafType, Callable[[str], Any]] = {
    LeafType.BOOL: _coerce_bool,
    LeafType.INT: _coerce_int,
    LeafType.FLOAT: _coerce_float,
    LeafType.STRING: _coerce_string,
}


def _matches(value: Any, leaf_type: LeafType) -> bool:
    if leaf_type is LeafType.BOOL:
        return isinstance(value, bool)
    if leaf_type is LeafType.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if leaf_type is LeafType.FLOAT:
        return isinstance(value, float)
    return isinstance(value, str)


def coerce(raw_value: Any, leaf_type: LeafType) -> Any:
    """Converte `raw_value` para o tipo primitivo `leaf_type`.

    Raises:
        CoercionError: sem contexto de camada/caminho; o chamador completa.
    """
    if not isinstance(raw_value, str):
        # números tipados ainda passam pelas checagens de faixa e finitude
        if leaf_type in (LeafType.BOOL, LeafType.STRING) and _matches(raw_value, leaf_type):
            return raw_value
        try:
            raw_value = render_value(raw_value)
        except TypeError:
            raise CoercionError(
                raw_value=raw_value, expected=leaf_type, reason="valor não escalar"
            ) from None
    return _PARSERS[leaf_type](raw_value)
