# src/layered_config/core/merge.py
"""
Merge Engine canônico da configuração em camadas.

Este módulo implementa a política oficial de merge utilizada para
resolver a configuração final a partir das entradas brutas das cinco
camadas.

Política de merge:
    - a árvore de trabalho é inicializada exclusivamente pela camada
      DEFAULTS, garantindo cobertura total antes de qualquer override
    - as camadas FILE, LOWER_ENV, UPPER_ENV e CLI são aplicadas em ordem
      numérica crescente
    - cada entrada sobrescreve apenas a folha que nomeia (merge em
      granularidade de folha: nenhum grupo é substituído por inteiro)
    - dentro de uma mesma camada, a última entrada para uma folha vence
    - entradas com erro de resolução ou coerção são coletadas, e a
      passada continua

Princípios fundamentais:
    - O merge é determinístico: as mesmas entradas produzem a mesma árvore
    - Nenhum input é mutado durante o processo
    - Não existe configuração parcial: com qualquer erro, nenhuma árvore
      é entregue

Limites explícitos:
    - Não lê fontes externas (ver `sources`)
    - Não ordena camadas por outra regra além do número da camada
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from .coerce import coerce
from .errors import CoercionError, ConfigIssue, ConfigResolutionError, UnknownPathError
from .paths import PathResolver
from .schema import SchemaRegistry
from .trace import ResolutionTrace
from .tree import ConfigTree
from .types import CanonicalPath, Layer, RawEntry, ResolvedValue, dotted
from .validate import validate_tree


WorkingTree = Dict[CanonicalPath, ResolvedValue]


def _bucket_by_layer(entries: Iterable[RawEntry]) -> Dict[Layer, List[RawEntry]]:
    buckets: Dict[Layer, List[RawEntry]] = {layer: [] for layer in Layer}
    for entry in entries:
        buckets[Layer(entry.layer)].append(entry)
    return buckets


class MergeEngine:
    """
    Dobra as entradas das cinco camadas em uma árvore de trabalho.

    `fold` devolve a árvore de trabalho e as issues coletadas, sem
    levantar; `merge` completa com a validação e levanta
    `ConfigResolutionError` se houver qualquer issue.
    """

    def __init__(self, schema: SchemaRegistry, *, trace: Optional[ResolutionTrace] = None):
        self.schema = schema
        self.resolver = PathResolver(schema)
        self.trace = trace

    def _log(self, **kwargs) -> None:
        if self.trace is not None:
            self.trace.log(**kwargs)

    def _apply(self, entry: RawEntry, working: WorkingTree) -> Optional[ConfigIssue]:
        layer = Layer(entry.layer)
        try:
            path = self.resolver.resolve_for_layer(entry.raw_key, layer)
        except UnknownPathError as e:
            return e

        leaf = self.schema.leaf(path)
        try:
            value = coerce(entry.raw_value, leaf.type)
        except CoercionError as e:
            return replace(e, layer=layer, raw_key=entry.raw_key, path=path)

        previous = working.get(path)
        if previous is not None and previous.layer != layer:
            self._log(
                event="leaf.override",
                level="DEBUG",
                path=dotted(path),
                from_layer=previous.layer.label,
                to_layer=layer.label,
            )
        working[path] = ResolvedValue(path=path, value=value, layer=layer)
        return None

    def fold(self, entries: Iterable[RawEntry]) -> Tuple[WorkingTree, List[ConfigIssue]]:
        buckets = _bucket_by_layer(entries)
        working: WorkingTree = {}
        issues: List[ConfigIssue] = []

        for layer in sorted(Layer):
            applied = 0
            rejected = 0
            for entry in buckets[layer]:
                issue = self._apply(entry, working)
                if issue is None:
                    applied += 1
                    continue
                rejected += 1
                issues.append(issue)
                self._log(
                    event="entry.rejected",
                    level="WARNING",
                    message=issue.message,
                    layer=layer.label,
                    raw_key=entry.raw_key,
                    error=issue.code,
                )
            self._log(
                event="layer.applied",
                layer=layer.label,
                applied=applied,
                rejected=rejected,
            )

        # ordem do schema, independente da ordem das entradas
        ordered = {p: working[p] for p in self.schema.leaf_paths() if p in working}
        return ordered, issues

    def merge(self, entries: Iterable[RawEntry]) -> ConfigTree:
        working, issues = self.fold(entries)
        issues.extend(validate_tree(self.schema, working))
        if issues:
            raise ConfigResolutionError(issues)
        return ConfigTree(working)


def merge_layers(
    schema: SchemaRegistry,
    entries: Iterable[RawEntry],
    *,
    trace: Optional[ResolutionTrace] = None,
) -> ConfigTree:
    """
    Resolve a ConfigTree a partir das entradas brutas de todas as camadas.

    Args:
        schema (SchemaRegistry): Schema imutável do processo.
        entries (Iterable[RawEntry]): Entradas de qualquer camada, em qualquer
            ordem entre camadas; dentro de uma camada a ordem é preservada.
        trace (Optional[ResolutionTrace]): Event log opcional.

    Returns:
        ConfigTree: Configuração resolvida e validada.

    Raises:
        ConfigResolutionError: Com todas as issues de resolução, coerção e
            restrição coletadas na passada.
    """
    return MergeEngine(schema, trace=trace).merge(entries)
