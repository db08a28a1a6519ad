"""Validator pós-merge.

Percorre todas as folhas do schema e confirma, para cada uma:
  - presença na árvore de trabalho (garantida pelos defaults, mas checada)
  - tipo Python compatível com o tipo declarado
  - restrições declaradas (`positive`, `non_empty`, `min=...`, ...)

Violações são coletadas como `ConstraintError`, nunca levantadas
individualmente, para que a passada reporte todas juntas.
"""

from __future__ import annotations

from typing import List, Mapping

from .errors import ConfigIssue, ConstraintError
from .schema import SchemaRegistry
from .types import CanonicalPath, LeafType, ResolvedValue


_PY_TYPES = {
    LeafType.BOOL: (bool,),
    LeafType.INT: (int,),
    LeafType.FLOAT: (float,),
    LeafType.STRING: (str,),
}


def _has_type(value, leaf_type: LeafType) -> bool:
    if leaf_type in (LeafType.INT, LeafType.FLOAT) and isinstance(value, bool):
        return False
    return isinstance(value, _PY_TYPES[leaf_type])


def validate_tree(
    schema: SchemaRegistry,
    values: Mapping[CanonicalPath, ResolvedValue],
) -> List[ConfigIssue]:
    issues: List[ConfigIssue] = []

    for path, leaf in schema.leaves():
        resolved = values.get(path)
        if resolved is None:
            issues.append(ConstraintError(path=path, value=None, constraint="required"))
            continue

        if not _has_type(resolved.value, leaf.type):
            issues.append(
                ConstraintError(
                    path=path,
                    value=resolved.value,
                    constraint=f"type={leaf.type.value}",
                    layer=resolved.layer,
                )
            )
            continue

        for constraint in leaf.constraints:
            if not constraint(resolved.value):
                issues.append(
                    ConstraintError(
                        path=path,
                        value=resolved.value,
                        constraint=constraint.name,
                        layer=resolved.layer,
                    )
                )

    return issues
