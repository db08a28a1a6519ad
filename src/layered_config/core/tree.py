# src/layered_config/core/tree.py
"""
ConfigTree — snapshot imutável da configuração resolvida.

A ConfigTree é o artefato final entregue ao restante do processo. Ela é
isomórfica ao schema: cada caminho de folha aparece exatamente uma vez,
associado ao `ResolvedValue` vencedor (valor tipado + camada de origem).

Decisões arquiteturais:
    - Construída uma única vez pelo Merge Engine e nunca mutada
    - Pode ser compartilhada entre threads sem sincronização
    - Expõe apenas valores tipados (nenhuma string bruta vaza)
    - Igualdade considera valores e camadas, na ordem do schema

Acesso:
    - `tree.value("database.port")` ou `tree.value(("database", "port"))` → valor tipado
    - `tree[("database", "port")]` e `tree.get(...)` → ResolvedValue (contrato de Mapping)
    - `tree.to_dict()` → dicionário aninhado (cópia)
    - `tree.explain()` → proveniência por caminho
    - `tree.fingerprint` → SHA-256 do JSON canônico de `to_dict()`
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Sequence, Union

from .hashing import compute_config_hash
from .types import CanonicalPath, Layer, ResolvedValue, dotted


PathLike = Union[str, Sequence[str]]


def as_path(path: PathLike) -> CanonicalPath:
    if isinstance(path, str):
        return tuple(path.split("."))
    return tuple(path)


class ConfigTree(Mapping):
    """Mapa imutável CanonicalPath → ResolvedValue."""

    __slots__ = ("_values", "_fingerprint")

    def __init__(self, values: Dict[CanonicalPath, ResolvedValue]):
        self._values = MappingProxyType(dict(values))
        self._fingerprint = compute_config_hash(self.to_dict())

    def __getitem__(self, path: PathLike) -> ResolvedValue:
        return self._values[as_path(path)]

    def __iter__(self) -> Iterator[CanonicalPath]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigTree):
            return NotImplemented
        return list(self._values.items()) == list(other._values.items())

    def __hash__(self) -> int:
        return hash(tuple(self._values.items()))

    def __repr__(self) -> str:
        return f"ConfigTree({len(self)} leaves, fingerprint={self._fingerprint[:12]})"

    # -----------------------------
    # Acesso tipado
    # -----------------------------
    def value(self, path: PathLike, default: Any = None) -> Any:
        """Valor tipado da folha; `default` se o caminho não for folha."""
        resolved = self._values.get(as_path(path))
        if resolved is None:
            return default
        return resolved.value

    def source_of(self, path: PathLike) -> Layer:
        return self[path].layer

    def explain(self) -> Dict[str, str]:
        return {dotted(p): rv.layer.label for p, rv in self._values.items()}

    # -----------------------------
    # Exportação
    # -----------------------------
    def to_flat_dict(self) -> Dict[str, Any]:
        return {dotted(p): rv.value for p, rv in self._values.items()}

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for path, rv in self._values.items():
            cursor = out
            for seg in path[:-1]:
                cursor = cursor.setdefault(seg, {})
            cursor[path[-1]] = rv.value
        return out

    def section(self, prefix: PathLike) -> Dict[str, Any]:
        """Subárvore aninhada sob `prefix`; KeyError se o prefixo não existir."""
        node: Any = self.to_dict()
        for seg in as_path(prefix):
            if not isinstance(node, dict) or seg not in node:
                raise KeyError(dotted(as_path(prefix)))
            node = node[seg]
        return node

    @property
    def fingerprint(self) -> str:
        return self._fingerprint
