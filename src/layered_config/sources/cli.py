"""Source da camada 5: tokens de linha de comando.

Formas aceitas (caminho em notação com pontos):
  - `--database.port 5433`
  - `--database.port=5433`
  - `--debug` sozinho → valor "true" (flag booleana)

Um token seguinte é tratado como valor quando não começa com `--`;
valores negativos (`--offset -5`) são, portanto, aceitos.

Rejeitados como `SourceFormatError` da camada 5:
  - tokens posicionais (sem `--`)
  - `--` isolado ou nome vazio (`--=3`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from layered_config.core.errors import ConfigResolutionError, SourceFormatError
from layered_config.core.types import CanonicalPath, Layer, RawEntry


FLAG_PREFIX = "--"
BARE_FLAG_VALUE = "true"


@dataclass(frozen=True)
class CliSource:
    argv: Sequence[str] = field(default_factory=tuple)
    layer: Layer = Layer.CLI

    def produce(self) -> List[RawEntry]:
        entries: List[RawEntry] = []
        errors: List[SourceFormatError] = []
        tokens = list(self.argv)

        i = 0
        while i < len(tokens):
            token = tokens[i]
            i += 1

            if not isinstance(token, str) or not token.startswith(FLAG_PREFIX):
                errors.append(
                    SourceFormatError(layer=self.layer, key=str(token), detail="token posicional inesperado")
                )
                continue

            body = token[len(FLAG_PREFIX):]
            if "=" in body:
                name, value = body.split("=", 1)
            elif i < len(tokens) and isinstance(tokens[i], str) and not tokens[i].startswith(FLAG_PREFIX):
                name, value = body, tokens[i]
                i += 1
            else:
                name, value = body, BARE_FLAG_VALUE

            if not name:
                errors.append(SourceFormatError(layer=self.layer, key=token, detail="nome de flag vazio"))
                continue

            entries.append(RawEntry(layer=self.layer, raw_key=name, raw_value=value))

        if errors:
            raise ConfigResolutionError(errors)
        return entries


def cli_flag(path: CanonicalPath) -> str:
    return FLAG_PREFIX + ".".join(path)
