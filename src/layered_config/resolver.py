# src/layered_config/resolver.py
"""
Resolução canônica da configuração em camadas (passada única).

Este módulo orquestra a resolução completa:

    schema → Sources (independentes) → Merge Engine (ordem estrita) →
    Validator → ConfigTree imutável

A configuração é resolvida a partir de:
    - defaults do schema (obrigatórios, sempre presentes)
    - um mapa aninhado já parseado, ou um arquivo YAML/JSON (opcional)
    - uma tabela de ambiente injetada (opcional)
    - tokens de linha de comando já separados (opcional)

Política de resolução:
    - Precedência fixa: DEFAULTS < FILE < LOWER_ENV < UPPER_ENV < CLI
    - Falhas de formato das Sources são coletadas junto com as falhas de
      resolução, coerção e restrição; a passada sempre vai até o fim
    - Com qualquer falha, um único `ConfigResolutionError` é levantado com
      a lista completa; nenhuma configuração parcial é entregue

Decisões arquiteturais:
    - Nenhum estado global é lido: `environ` e `argv` são injetados
    - Um arquivo de configuração inexistente não contribui entradas
    - Não existe recarga: o resultado é um snapshot único

Limites explícitos:
    - Não encerra o processo nem imprime erros (ver `show`)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from layered_config.core.errors import ConfigIssue, ConfigResolutionError
from layered_config.core.merge import MergeEngine
from layered_config.core.schema import SchemaRegistry
from layered_config.core.trace import ResolutionTrace
from layered_config.core.tree import ConfigTree
from layered_config.core.types import RawEntry
from layered_config.core.validate import validate_tree
from layered_config.sources import (
    CliSource,
    DefaultsSource,
    FileSource,
    LowercaseEnvSource,
    Source,
    UppercaseEnvSource,
)


def build_sources(
    schema: SchemaRegistry,
    *,
    app_name: str,
    file_tree: Optional[Mapping[str, Any]] = None,
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    argv: Optional[Sequence[str]] = None,
    trace: Optional[ResolutionTrace] = None,
) -> List[Source]:
    """Monta as cinco Sources na ordem de precedência."""
    if not isinstance(app_name, str) or not app_name.strip():
        raise ValueError("app_name must be a non-empty string")
    if file_tree is not None and config_path is not None:
        raise ValueError("pass either file_tree or config_path, not both")

    if config_path is not None:
        if not Path(config_path).exists() and trace is not None:
            trace.log(event="file.missing", message=f"arquivo ausente: {config_path}", path=str(config_path))
        file_source = FileSource.from_path(config_path)
    else:
        file_source = FileSource(file_tree or {})

    return [
        DefaultsSource(schema),
        file_source,
        LowercaseEnvSource(environ or {}, app_name),
        UppercaseEnvSource(environ or {}, app_name),
        CliSource(tuple(argv or ())),
    ]


def collect_entries(
    sources: Sequence[Source],
    *,
    trace: Optional[ResolutionTrace] = None,
) -> Tuple[List[RawEntry], List[ConfigIssue]]:
    """Roda cada Source e separa entradas de falhas de formato."""
    entries: List[RawEntry] = []
    issues: List[ConfigIssue] = []

    for source in sources:
        try:
            produced = source.produce()
        except ConfigResolutionError as e:
            issues.extend(e.errors)
            if trace is not None:
                trace.log(
                    event="source.rejected",
                    level="WARNING",
                    layer=source.layer.label,
                    errors=len(e.errors),
                )
            continue
        entries.extend(produced)
        if trace is not None:
            trace.log(event="source.collected", layer=source.layer.label, count=len(produced))

    return entries, issues


def resolve_config(
    schema: SchemaRegistry,
    *,
    app_name: str,
    file_tree: Optional[Mapping[str, Any]] = None,
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    argv: Optional[Sequence[str]] = None,
    trace: Optional[ResolutionTrace] = None,
) -> ConfigTree:
    """
    Resolve a configuração efetiva a partir das cinco camadas.

    Args:
        schema (SchemaRegistry): Schema imutável do processo.
        app_name (str): Nome da aplicação; define os prefixos de ambiente.
        file_tree (Optional[Mapping]): Mapa aninhado já parseado (camada 2).
        config_path (Optional[str]): Alternativa a `file_tree`: arquivo YAML/JSON.
        environ (Optional[Mapping[str, str]]): Tabela de ambiente (camadas 3 e 4).
        argv (Optional[Sequence[str]]): Tokens de CLI, sem o nome do programa (camada 5).
        trace (Optional[ResolutionTrace]): Event log opcional.

    Returns:
        ConfigTree: Configuração resolvida, validada e imutável.

    Raises:
        ConfigResolutionError: Com todas as issues coletadas na passada.
        ValueError: Se `app_name` for vazio ou ambas as formas de arquivo forem passadas.
    """
    sources = build_sources(
        schema,
        app_name=app_name,
        file_tree=file_tree,
        config_path=config_path,
        environ=environ,
        argv=argv,
        trace=trace,
    )
    entries, issues = collect_entries(sources, trace=trace)

    engine = MergeEngine(schema, trace=trace)
    working, merge_issues = engine.fold(entries)
    issues.extend(merge_issues)
    issues.extend(validate_tree(schema, working))

    if issues:
        if trace is not None:
            trace.log(event="resolution.failed", level="ERROR", errors=len(issues))
        raise ConfigResolutionError(issues)

    tree = ConfigTree(working)
    if trace is not None:
        trace.log(event="resolution.completed", fingerprint=tree.fingerprint)
    return tree
