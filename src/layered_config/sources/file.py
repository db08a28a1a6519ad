"""Source da camada 2: árvore aninhada vinda do parser de arquivo.

A árvore é achatada juntando chaves aninhadas com `.`. Folhas ausentes
não produzem entrada (ausência não é override).

Regras de formato:
  - chaves devem ser strings
  - folhas devem ser escalares (str, bool, int, float)
  - `null` e listas são rejeitados como `SourceFormatError`
  - escalares tipados passam adiante tipados; o Coercer decide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from layered_config.core.errors import ConfigResolutionError, SourceFormatError
from layered_config.core.types import Layer, RawEntry

from .loader import load_file


_SCALARS = (str, bool, int, float)


@dataclass(frozen=True)
class FileSource:
    tree: Mapping[str, Any] = field(default_factory=dict)
    layer: Layer = Layer.FILE

    @classmethod
    def from_path(cls, path: Optional[str]) -> "FileSource":
        """Carrega o arquivo via loader; arquivo inexistente → camada vazia."""
        if path is None or not Path(path).exists():
            return cls({})
        return cls(load_file(Path(path)))

    def produce(self) -> List[RawEntry]:
        entries: List[RawEntry] = []
        errors: List[SourceFormatError] = []

        if not isinstance(self.tree, Mapping):
            raise ConfigResolutionError(
                [SourceFormatError(layer=self.layer, key="", detail="raiz deve ser um mapa")]
            )
        self._flatten(self.tree, (), entries, errors)

        if errors:
            raise ConfigResolutionError(errors)
        return entries

    def _flatten(
        self,
        node: Mapping[Any, Any],
        prefix: Tuple[str, ...],
        entries: List[RawEntry],
        errors: List[SourceFormatError],
    ) -> None:
        for key, value in node.items():
            if not isinstance(key, str):
                errors.append(
                    SourceFormatError(
                        layer=self.layer,
                        key=".".join(prefix + (str(key),)),
                        detail=f"chave deve ser string, recebido: {type(key).__name__}",
                    )
                )
                continue

            path = prefix + (key,)
            if isinstance(value, Mapping):
                self._flatten(value, path, entries, errors)
            elif isinstance(value, _SCALARS):
                entries.append(RawEntry(layer=self.layer, raw_key=".".join(path), raw_value=value))
            else:
                detail = "valor nulo" if value is None else f"valor não escalar: {type(value).__name__}"
                errors.append(SourceFormatError(layer=self.layer, key=".".join(path), detail=detail))
