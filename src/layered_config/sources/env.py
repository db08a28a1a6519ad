# src/layered_config/sources/env.py
"""
Sources das camadas 3 e 4: variáveis de ambiente.

Duas convenções de nome convivem, com precedências distintas:

    - camada 3 (LOWER_ENV): `{prefix}.{segment}.{segment}`
        prefixo = nome da aplicação em minúsculas; o restante, já separado
        por pontos, vira a chave bruta literalmente (sensível a caixa)

    - camada 4 (UPPER_ENV): `{PREFIX}_{SEGMENT}_{SEGMENT}`
        prefixo = nome da aplicação em maiúsculas; o restante é convertido
        para minúsculas e resolvido na notação UNDERSCORED

Decisões arquiteturais:
    - A tabela de ambiente é injetada como mapa simples; nenhuma Source lê
      `os.environ` diretamente
    - A troca de `_` por segmentos é feita pelo resolver de caminhos, e não
      por substituição ingênua aqui
    - Variáveis fora do prefixo são ignoradas; variáveis dentro do prefixo
      nunca são descartadas em silêncio
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Tuple

from layered_config.core.errors import ConfigResolutionError, SourceFormatError
from layered_config.core.types import CanonicalPath, Layer, RawEntry


def _scan(
    environ: Mapping[str, str],
    prefix: str,
    layer: Layer,
    lowercase: bool,
) -> List[RawEntry]:
    entries: List[RawEntry] = []
    errors: List[SourceFormatError] = []

    # ordem estável entre execuções, independente da tabela injetada
    for name in sorted(environ, key=str):
        if not isinstance(name, str):
            errors.append(
                SourceFormatError(
                    layer=layer,
                    key=str(name),
                    detail=f"nome de variável deve ser string, recebido: {type(name).__name__}",
                )
            )
            continue
        if not name.startswith(prefix):
            continue
        value = environ[name]
        if not isinstance(value, str):
            errors.append(
                SourceFormatError(
                    layer=layer,
                    key=name,
                    detail=f"valor de ambiente deve ser string, recebido: {type(value).__name__}",
                )
            )
            continue
        raw_key = name[len(prefix):]
        entries.append(RawEntry(layer=layer, raw_key=raw_key.lower() if lowercase else raw_key, raw_value=value))

    if errors:
        raise ConfigResolutionError(errors)
    return entries


@dataclass(frozen=True)
class LowercaseEnvSource:
    environ: Mapping[str, str] = field(default_factory=dict)
    app_name: str = ""
    layer: Layer = Layer.LOWER_ENV

    @property
    def prefix(self) -> str:
        return f"{self.app_name.lower()}."

    def produce(self) -> List[RawEntry]:
        return _scan(self.environ, self.prefix, self.layer, lowercase=False)


@dataclass(frozen=True)
class UppercaseEnvSource:
    environ: Mapping[str, str] = field(default_factory=dict)
    app_name: str = ""
    layer: Layer = Layer.UPPER_ENV

    @property
    def prefix(self) -> str:
        return f"{self.app_name.upper()}_"

    def produce(self) -> List[RawEntry]:
        return _scan(self.environ, self.prefix, self.layer, lowercase=True)


def env_var_names(path: CanonicalPath, app_name: str) -> Tuple[str, str]:
    """Nomes (camada 3, camada 4) pelos quais uma folha é alcançável."""
    lower = ".".join((app_name.lower(),) + tuple(path))
    upper = "_".join((app_name.upper(),) + tuple(seg.upper() for seg in path))
    return lower, upper
