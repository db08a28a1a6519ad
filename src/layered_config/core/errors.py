# src/layered_config/core/errors.py
"""
Exceções canônicas da resolução de configuração.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a construção do schema, a coleta das camadas e a resolução da
configuração final.

Existem duas famílias de erro:

    1. Erros fatais (levantados imediatamente):
        - SchemaDefinitionError e subclasses → schema mal declarado
        - erros do colaborador de arquivo → arquivo ilegível ou de formato
          não suportado

    2. Issues agregáveis (coletadas, nunca interrompem a passada):
        - SourceFormatError → entrada bruta malformada vinda de uma Source
        - UnknownPathError  → chave que não resolve para nenhuma folha
        - CoercionError     → valor presente mas não conversível ao tipo da folha
        - ConstraintError   → valor conversível mas que viola uma restrição

As issues agregáveis são dataclasses imutáveis que também são exceções:
podem ser levantadas por componentes puros (ex.: Coercer) e capturadas
pelo Merge Engine, que as acumula e, ao final, levanta um único
`ConfigResolutionError` contendo a lista completa.

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - Cada issue produz exatamente uma mensagem por chave ofensora
    - Nenhuma configuração parcial acompanha um erro agregado
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Type

from .types import CanonicalPath, Layer, LeafType, dotted


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Todas as exceções levantadas durante construção de schema, coleta de
    fontes e resolução devem herdar desta classe, permitindo captura
    genérica por quem inicializa o processo.
    """


# ---------------------------------------------------------------------------
# Schema (fatal)
# ---------------------------------------------------------------------------

class SchemaDefinitionError(ConfigError):
    """Schema declarado de forma estruturalmente inválida (ex.: vazio)."""


class DuplicateSchemaPathError(SchemaDefinitionError):
    """
    Caminho declarado duas vezes, ou declarado ao mesmo tempo como folha
    e como prefixo de grupo.
    """


class InvalidSegmentNameError(SchemaDefinitionError):
    """
    Nome de segmento vazio, com maiúsculas, ou contendo `.`, `_`, `=`
    ou espaços.

    A ausência de `.` e `_` nos segmentos é o que torna a divisão de
    chaves não ambígua em ambas as notações.
    """


# ---------------------------------------------------------------------------
# Colaborador de arquivo (fatal)
# ---------------------------------------------------------------------------

class UnsupportedConfigFormatError(ConfigError):
    """
    Formato do arquivo de configuração não suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo de configuração não é um mapa."""


class ConfigParseError(ConfigError):
    """Falha ao parsear YAML/JSON."""


# ---------------------------------------------------------------------------
# Issues agregáveis
# ---------------------------------------------------------------------------

def _layer_label(layer: Optional[Layer]) -> str:
    if layer is None:
        return "?"
    return f"{int(layer)}:{layer.label}"


@dataclass(frozen=True)
class ConfigIssue(ConfigError):
    """
    Base das issues agregáveis.

    Cada subclasse define um `code` estável (não é texto livre) e uma
    `message` curta e humana. `to_dict()` produz o payload serializável
    usado para reportar o erro ao operador.
    """

    code: ClassVar[str] = "CONFIG_ISSUE"

    @property
    def message(self) -> str:  # pragma: no cover
        return self.code

    def details(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.code, "message": self.message, "details": self.details()}

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SourceFormatError(ConfigIssue):
    """Entrada malformada vinda do colaborador externo de uma camada."""

    code: ClassVar[str] = "SOURCE_FORMAT"

    layer: Layer
    key: str
    detail: str

    @property
    def message(self) -> str:
        return f"[layer {_layer_label(self.layer)}] entrada malformada em '{self.key}': {self.detail}"

    def details(self) -> Dict[str, Any]:
        return {"layer": int(self.layer), "key": self.key, "detail": self.detail}


@dataclass(frozen=True)
class UnknownPathError(ConfigIssue):
    """Chave bruta que não resolve para nenhuma folha do schema."""

    code: ClassVar[str] = "UNKNOWN_PATH"

    layer: Layer
    raw_key: str
    reason: str = ""

    @property
    def message(self) -> str:
        msg = f"[layer {_layer_label(self.layer)}] chave desconhecida '{self.raw_key}'"
        if self.reason:
            msg += f": {self.reason}"
        return msg

    def details(self) -> Dict[str, Any]:
        return {"layer": int(self.layer), "raw_key": self.raw_key, "reason": self.reason}


@dataclass(frozen=True)
class CoercionError(ConfigIssue):
    """
    Valor presente mas não conversível para o tipo declarado da folha.

    O Coercer levanta esta issue sem contexto (apenas valor e tipo); o
    Merge Engine a completa com camada, chave bruta e caminho canônico.
    """

    code: ClassVar[str] = "COERCION"

    raw_value: Any
    expected: LeafType
    layer: Optional[Layer] = None
    raw_key: Optional[str] = None
    path: Optional[CanonicalPath] = None
    reason: str = ""

    @property
    def message(self) -> str:
        where = dotted(self.path) if self.path else (self.raw_key or "?")
        msg = (
            f"[layer {_layer_label(self.layer)}] valor {self.raw_value!r} para '{where}' "
            f"não é um {self.expected.value} válido"
        )
        if self.reason:
            msg += f" ({self.reason})"
        return msg

    def details(self) -> Dict[str, Any]:
        return {
            "layer": int(self.layer) if self.layer is not None else None,
            "raw_key": self.raw_key,
            "path": dotted(self.path) if self.path else None,
            "raw_value": self.raw_value,
            "expected": self.expected.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ConstraintError(ConfigIssue):
    """Valor tipado corretamente que viola uma restrição declarada."""

    code: ClassVar[str] = "CONSTRAINT"

    path: CanonicalPath
    value: Any
    constraint: str
    layer: Optional[Layer] = None

    @property
    def message(self) -> str:
        return (
            f"[layer {_layer_label(self.layer)}] '{dotted(self.path)}' = {self.value!r} "
            f"viola a restrição '{self.constraint}'"
        )

    def details(self) -> Dict[str, Any]:
        return {
            "layer": int(self.layer) if self.layer is not None else None,
            "path": dotted(self.path),
            "value": self.value,
            "constraint": self.constraint,
        }


# ---------------------------------------------------------------------------
# Erro agregado
# ---------------------------------------------------------------------------

class ConfigResolutionError(ConfigError):
    """
    Falha da resolução com a lista completa de issues coletadas.

    Levantada apenas quando a lista não é vazia. `str()` produz uma linha
    de cabeçalho seguida de uma linha por issue, para que o chamador
    possa exibir as mensagens literalmente.
    """

    def __init__(self, errors: Iterable[ConfigIssue]):
        self.errors: Tuple[ConfigIssue, ...] = tuple(errors)
        super().__init__(self._render())

    def _render(self) -> str:
        lines = [f"resolução de configuração falhou com {len(self.errors)} erro(s):"]
        lines.extend(f"  - {e.message}" for e in self.errors)
        return "\n".join(lines)

    def of_type(self, kind: Type[ConfigIssue]) -> List[ConfigIssue]:
        return [e for e in self.errors if isinstance(e, kind)]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.errors]
