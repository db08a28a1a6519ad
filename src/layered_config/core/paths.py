# src/layered_config/core/paths.py
"""
Resolver de caminhos: chave bruta → caminho canônico.

Cada camada escreve suas chaves em uma notação própria:

    - DOTTED:       `database.max.connections`   (defaults, arquivo, env minúsculo, CLI)
    - UNDERSCORED:  `database_max_connections`   (env maiúsculo, já sem prefixo)

Como nenhum segmento do schema contém `.` ou `_`, a divisão de uma chave
pelo separador da sua notação produz exatamente a sequência de segmentos
do caminho canônico. A resolução, em ambas as notações, é portanto a
mesma caminhada na árvore do schema, diferindo apenas no separador:
não há busca com backtracking nem correspondência pelo prefixo mais longo.

Política de resolução:
    - a chave é inteiramente consumida (nenhum segmento sobra)
    - a caminhada termina exatamente em uma folha (nunca em um grupo)
    - segmentos vazios (`a..b`, `a_`, chave vazia) são rejeitados
    - na notação UNDERSCORED a chave é comparada em minúsculas

Falhas produzem `UnknownPathError` com a camada e a chave bruta originais.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .errors import UnknownPathError
from .schema import Group, Leaf, SchemaRegistry
from .types import CanonicalPath, Layer, LAYER_NOTATION, Notation, dotted


def split_key(raw_key: str, notation: Notation) -> Tuple[str, ...]:
    key = raw_key.lower() if notation is Notation.UNDERSCORED else raw_key
    return tuple(key.split(notation.separator))


class PathResolver:
    """Resolve chaves brutas contra um `SchemaRegistry` imutável."""

    def __init__(self, schema: SchemaRegistry):
        self.schema = schema
        self._cache: Dict[Tuple[str, Notation], CanonicalPath] = {}

    def resolve(self, raw_key: str, notation: Notation, layer: Layer) -> CanonicalPath:
        """
        Resolve `raw_key` para o caminho canônico de uma folha.

        Raises:
            UnknownPathError: se a chave não nomear exatamente uma folha.
        """
        cached = self._cache.get((raw_key, notation))
        if cached is not None:
            return cached

        segments = split_key(raw_key, notation)
        if any(seg == "" for seg in segments):
            raise UnknownPathError(layer=layer, raw_key=raw_key, reason="segmento vazio")

        node = self.schema.root
        for depth, seg in enumerate(segments):
            if isinstance(node, Leaf):
                raise UnknownPathError(
                    layer=layer,
                    raw_key=raw_key,
                    reason=f"'{dotted(segments[:depth])}' é folha; segmentos restantes: "
                    f"{dotted(segments[depth:])}",
                )
            child = node.children.get(seg)
            if child is None:
                raise UnknownPathError(layer=layer, raw_key=raw_key)
            node = child

        if isinstance(node, Group):
            raise UnknownPathError(
                layer=layer, raw_key=raw_key, reason="caminho parcial: termina em grupo"
            )

        self._cache[(raw_key, notation)] = segments
        return segments

    def resolve_for_layer(self, raw_key: str, layer: Layer) -> CanonicalPath:
        return self.resolve(raw_key, LAYER_NOTATION[layer], layer)


def render_key(path: CanonicalPath, notation: Notation) -> str:
    return notation.separator.join(path)
