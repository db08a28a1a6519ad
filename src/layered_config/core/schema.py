# src/layered_config/core/schema.py
"""
Registro estrutural do schema de configuração.

Este módulo define o `SchemaRegistry`, responsável por declarar a forma
da árvore de configuração: o caminho canônico de cada folha, seu tipo
primitivo, seu default e restrições opcionais.

O registry é construído uma única vez, a partir de uma lista plana de
declarações `(path, type, default[, constraints])`, e permanece
imutável durante toda a vida do processo.

Responsabilidades do módulo:
    - Validar nomes de segmento
    - Rejeitar caminhos duplicados e conflitos folha/grupo
    - Rejeitar schemas vazios
    - Validar que cada default já corresponde ao tipo da folha
    - Expor lookup por caminho e iteração de folhas

Decisões arquiteturais:
    - A árvore é montada a partir de declarações planas, e não de
      construtores aninhados, para permanecer introspectável
    - Segmentos não contêm `.` nem `_`: a divisão de uma chave em
      segmentos é, portanto, não ambígua em ambas as notações
    - Segmentos são minúsculos: a convenção de env maiúscula é
      normalizada para minúsculas antes da resolução
    - A ordem de declaração é preservada na iteração

Invariantes:
    - Todo caminho de folha é único
    - Nenhum nó é ao mesmo tempo folha e grupo
    - O registry nunca é mutado após construído

Limites explícitos:
    - Não resolve chaves brutas (ver `paths`)
    - Não realiza coerção
    - Não aplica restrições (ver `validate`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .constraints import Constraint, constraint_from_spec
from .errors import DuplicateSchemaPathError, InvalidSegmentNameError, SchemaDefinitionError
from .types import CanonicalPath, LeafType, dotted


_FORBIDDEN_SEGMENT = re.compile(r"[._=\s]")


@dataclass(frozen=True)
class Leaf:
    """Folha do schema: tipo primitivo, default tipado e restrições."""

    type: LeafType
    default: Any
    constraints: Tuple[Constraint, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class Group:
    """Grupo do schema: mapa imutável de nome de segmento para nó filho."""

    children: Mapping[str, "SchemaNode"] = field(default_factory=dict)


SchemaNode = Union[Leaf, Group]


@dataclass(frozen=True)
class LeafSpec:
    """Declaração plana de uma folha."""

    path: str
    type: LeafType
    default: Any
    constraints: Tuple[Constraint, ...] = ()
    description: str = ""


Declaration = Union[LeafSpec, Tuple[Any, ...]]


def validate_segment(segment: str) -> None:
    if not isinstance(segment, str) or not segment:
        raise InvalidSegmentNameError(f"segmento vazio ou não-string: {segment!r}")
    if _FORBIDDEN_SEGMENT.search(segment):
        raise InvalidSegmentNameError(
            f"segmento '{segment}' contém caractere proibido ('.', '_', '=' ou espaço)"
        )
    if segment != segment.lower():
        raise InvalidSegmentNameError(f"segmento '{segment}' deve ser minúsculo")


def _check_default(path: str, leaf_type: LeafType, default: Any) -> Any:
    if leaf_type is LeafType.BOOL:
        ok = isinstance(default, bool)
    elif leaf_type is LeafType.INT:
        ok = isinstance(default, int) and not isinstance(default, bool)
    elif leaf_type is LeafType.FLOAT:
        ok = isinstance(default, (int, float)) and not isinstance(default, bool)
        if ok:
            default = float(default)
    else:
        ok = isinstance(default, str)

    if not ok:
        raise SchemaDefinitionError(
            f"default de '{path}' deve ser {leaf_type.value}, recebido: {type(default).__name__}"
        )
    return default


def _as_leaf_spec(decl: Declaration) -> LeafSpec:
    if isinstance(decl, LeafSpec):
        return decl
    if not isinstance(decl, tuple) or len(decl) not in (3, 4):
        raise SchemaDefinitionError(
            f"declaração deve ser (path, type, default[, constraints]), recebido: {decl!r}"
        )
    path, leaf_type, default = decl[:3]
    try:
        leaf_type = LeafType(leaf_type)
    except ValueError as e:
        raise SchemaDefinitionError(f"tipo inválido em '{path}': {leaf_type!r}") from e
    constraints = tuple(constraint_from_spec(c) for c in (decl[3] if len(decl) == 4 else ()))
    return LeafSpec(path=path, type=leaf_type, default=default, constraints=constraints)


class SchemaRegistry:
    """
    Registro canônico do schema de configuração.

    Use `SchemaRegistry.from_declarations(...)` com uma lista plana ou
    `SchemaRegistry.from_mapping(...)` com um mapa aninhado (formato dos
    arquivos de schema).

    Exemplo:
        >>> schema = SchemaRegistry.from_declarations([
        ...     ("port", "int", 3000),
        ...     ("database.port", "int", 5432),
        ... ])
        >>> schema.lookup(("database", "port")).default
        5432
    """

    def __init__(self, root: Group, order: Sequence[CanonicalPath]):
        self._root = root
        self._order: Tuple[CanonicalPath, ...] = tuple(order)

    # -----------------------------
    # Construção
    # -----------------------------
    @classmethod
    def from_declarations(cls, declarations: Iterable[Declaration]) -> "SchemaRegistry":
        tree: Dict[str, Any] = {}
        order: List[CanonicalPath] = []

        for decl in declarations:
            spec = _as_leaf_spec(decl)
            if not isinstance(spec.path, str):
                raise SchemaDefinitionError(f"path deve ser string, recebido: {spec.path!r}")
            segments = tuple(spec.path.split("."))
            for seg in segments:
                validate_segment(seg)

            default = _check_default(spec.path, spec.type, spec.default)
            leaf = Leaf(
                type=spec.type,
                default=default,
                constraints=tuple(spec.constraints),
                description=spec.description,
            )

            cursor = tree
            for depth, seg in enumerate(segments[:-1]):
                node = cursor.setdefault(seg, {})
                if isinstance(node, Leaf):
                    raise DuplicateSchemaPathError(
                        f"'{dotted(segments[: depth + 1])}' já é folha; não pode conter '{spec.path}'"
                    )
                cursor = node

            last = segments[-1]
            if last in cursor:
                if isinstance(cursor[last], Leaf):
                    raise DuplicateSchemaPathError(f"caminho duplicado: {spec.path}")
                raise DuplicateSchemaPathError(f"'{spec.path}' já é grupo; não pode ser folha")
            cursor[last] = leaf
            order.append(segments)

        if not order:
            raise SchemaDefinitionError("schema vazio: ao menos uma folha é obrigatória")

        return cls(_freeze(tree), order)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SchemaRegistry":
        """Constrói o registry a partir de um mapa aninhado de declarações.

        Uma folha é um mapa com a chave `type`:

            database:
              port: {type: int, default: 5432, constraints: [positive]}
        """
        return cls.from_declarations(_walk_mapping(data, ()))

    # -----------------------------
    # Consulta
    # -----------------------------
    @property
    def root(self) -> Group:
        return self._root

    def lookup(self, path: Sequence[str]) -> Optional[SchemaNode]:
        node: SchemaNode = self._root
        for seg in path:
            if not isinstance(node, Group):
                return None
            child = node.children.get(seg)
            if child is None:
                return None
            node = child
        return node

    def leaf(self, path: Sequence[str]) -> Leaf:
        node = self.lookup(path)
        if not isinstance(node, Leaf):
            raise KeyError(dotted(tuple(path)))
        return node

    def leaf_paths(self) -> Iterator[CanonicalPath]:
        return iter(self._order)

    def leaves(self) -> Iterator[Tuple[CanonicalPath, Leaf]]:
        for path in self._order:
            yield path, self.leaf(path)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, str):
            path = tuple(path.split("."))
        if not isinstance(path, tuple):
            return False
        return isinstance(self.lookup(path), Leaf)


def _freeze(tree: Dict[str, Any]) -> Group:
    children: Dict[str, SchemaNode] = {}
    for name, node in tree.items():
        children[name] = node if isinstance(node, Leaf) else _freeze(node)
    return Group(children=MappingProxyType(children))


def _walk_mapping(data: Mapping[str, Any], prefix: CanonicalPath) -> Iterator[LeafSpec]:
    if not isinstance(data, Mapping):
        raise SchemaDefinitionError(f"grupo '{dotted(prefix)}' deve ser um mapa")
    for name, node in data.items():
        path = prefix + (str(name),)
        # `type` mapeado para outro mapa é um segmento chamado "type", não a declaração
        if isinstance(node, Mapping) and isinstance(node.get("type"), str):
            try:
                leaf_type = LeafType(node["type"])
            except ValueError as e:
                raise SchemaDefinitionError(f"tipo inválido em '{dotted(path)}': {node['type']!r}") from e
            if "default" not in node:
                raise SchemaDefinitionError(f"folha '{dotted(path)}' sem default")
            yield LeafSpec(
                path=dotted(path),
                type=leaf_type,
                default=node["default"],
                constraints=tuple(constraint_from_spec(c) for c in node.get("constraints") or ()),
                description=str(node.get("description", "")),
            )
        else:
            yield from _walk_mapping(node, path)
