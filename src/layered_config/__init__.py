# src/layered_config/__init__.py
"""
Layered Config — resolução determinística de configuração em cinco camadas.

Um único objeto de configuração, fortemente tipado, é resolvido a partir
de cinco fontes ordenadas por precedência:

    defaults (1) < arquivo (2) < env `app.a.b` (3) < env `APP_A_B` (4) < CLI (5)

O merge é guiado pelo schema e ocorre folha a folha: uma camada nunca
substitui um grupo inteiro, apenas as folhas que nomeia. Todas as falhas
de uma passada são reportadas juntas.

Arquitetura em alto nível:
    - core      → schema, resolver de caminhos, coercer, merge, validator, ConfigTree
    - sources   → adapters das cinco camadas e loader de arquivo
    - resolver  → orquestração da passada única
    - show      → ferramenta de linha de comando para inspecionar a resolução
"""

from .core.errors import (
    CoercionError,
    ConfigError,
    ConfigResolutionError,
    ConstraintError,
    SchemaDefinitionError,
    SourceFormatError,
    UnknownPathError,
)
from .core.schema import LeafSpec, SchemaRegistry
from .core.trace import ResolutionTrace
from .core.tree import ConfigTree
from .core.types import Layer, LeafType
from .resolver import resolve_config

__all__ = [
    "resolve_config",
    "SchemaRegistry",
    "LeafSpec",
    "ConfigTree",
    "ResolutionTrace",
    "Layer",
    "LeafType",
    "ConfigError",
    "ConfigResolutionError",
    "SchemaDefinitionError",
    "SourceFormatError",
    "UnknownPathError",
    "CoercionError",
    "ConstraintError",
]
