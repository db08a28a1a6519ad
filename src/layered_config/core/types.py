# src/layered_config/core/types.py
"""
Tipos canônicos da resolução de configuração.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Sources, Resolver de caminhos, Coercer, Merge Engine
e Validator.

Componentes principais:
    - Layer         → enum das cinco camadas, em ordem crescente de precedência
    - LeafType      → enum dos tipos primitivos de uma folha do schema
    - Notation      → notação de chave usada por uma camada (pontos ou underscores)
    - RawEntry      → entrada bruta produzida por uma Source
    - ResolvedValue → valor vencedor de uma folha após o merge

Invariantes:
    - Enums possuem valores canônicos e estáveis
    - RawEntry e ResolvedValue são imutáveis
    - Tipos não dependem de schema, sources ou merge

Limites explícitos:
    - Não resolve caminhos
    - Não realiza coerção
    - Não decide precedência (apenas a numera)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Tuple


CanonicalPath = Tuple[str, ...]


class Layer(IntEnum):
    """
    Camadas de configuração, numeradas por precedência.

    A precedência é fixa e não configurável:
        DEFAULTS(1) < FILE(2) < LOWER_ENV(3) < UPPER_ENV(4) < CLI(5)

    O valor numérico é usado diretamente para ordenar a aplicação das
    camadas no Merge Engine.
    """
    DEFAULTS = 1
    FILE = 2
    LOWER_ENV = 3
    UPPER_ENV = 4
    CLI = 5

    @property
    def label(self) -> str:
        return self.name.lower()


class LeafType(str, Enum):
    """Tipos primitivos aceitos em folhas do schema."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"


class Notation(str, Enum):
    """
    Notação de chave bruta.

    - DOTTED: segmentos separados por `.` (defaults, arquivo, env minúsculo, CLI)
    - UNDERSCORED: segmentos separados por `_` (env maiúsculo)
    """
    DOTTED = "dotted"
    UNDERSCORED = "underscored"

    @property
    def separator(self) -> str:
        return "." if self is Notation.DOTTED else "_"


LAYER_NOTATION = {
    Layer.DEFAULTS: Notation.DOTTED,
    Layer.FILE: Notation.DOTTED,
    Layer.LOWER_ENV: Notation.DOTTED,
    Layer.UPPER_ENV: Notation.UNDERSCORED,
    Layer.CLI: Notation.DOTTED,
}


def dotted(path: CanonicalPath) -> str:
    return ".".join(path)


@dataclass(frozen=True)
class RawEntry:
    """
    Entrada bruta de uma camada.

    Campos:
        - layer: camada de origem
        - raw_key: chave na notação da camada (ex.: `database.port`, `database_port`)
        - raw_value: valor bruto; string para env/CLI/defaults, escalar já tipado
          quando vindo do parser de arquivo

    Uma RawEntry é criada por uma Source e descartada após o merge.
    """
    layer: Layer
    raw_key: str
    raw_value: Any


@dataclass(frozen=True)
class ResolvedValue:
    """Valor vencedor de uma folha, com a camada que o escreveu."""
    path: CanonicalPath
    value: Any
    layer: Layer

    @property
    def dotted(self) -> str:
        return dotted(self.path)
