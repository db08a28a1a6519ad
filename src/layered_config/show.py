# src/layered_config/show.py
"""
Ferramenta de linha de comando `layered-config-show`.

Resolve a configuração efetiva a partir de um arquivo de schema e das
cinco camadas, e imprime o resultado para inspeção.

Responsabilidades:
    - Ler o schema declarado em YAML/JSON (`--schema`)
    - Resolver com o arquivo opcional (`--config`), o ambiente real do
      processo e os overrides informados após um `--` isolado
    - Imprimir a árvore completa, uma seção, a proveniência por folha
      (`--explain`) ou apenas o fingerprint (`--fingerprint`)

Códigos de saída:
    - 0 → configuração resolvida e impressa
    - 1 → falha de resolução (uma linha por erro), arquivo ilegível ou
      seção inexistente

Limites explícitos:
    - Único ponto do pacote que lê `os.environ` e escreve em stdout/stderr
    - Não grava arquivos
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import yaml

from layered_config.core.errors import ConfigError, ConfigResolutionError
from layered_config.core.schema import SchemaRegistry
from layered_config.core.tree import ConfigTree
from layered_config.resolver import resolve_config
from layered_config.sources.loader import load_file


def _split_overrides(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    args = list(argv)
    if "--" in args:
        idx = args.index("--")
        return args[:idx], args[idx + 1:]
    return args, []


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exibe a configuração resolvida",
        epilog="Tokens após um '--' isolado são aplicados como overrides de linha de comando (ex.: -- --port 9000).",
    )
    parser.add_argument("--schema", required=True, help="arquivo YAML/JSON com a declaração do schema")
    parser.add_argument("--app-name", required=True, help="prefixo das variáveis app.a.b / APP_A_B")
    parser.add_argument("--config", default=None, help="arquivo de configuração YAML/JSON (opcional)")
    parser.add_argument("--section", default=None, help="ex.: database")
    parser.add_argument("--as", dest="fmt", choices=["json", "yaml"], default="yaml")
    parser.add_argument("--explain", action="store_true", help="imprime a camada vencedora de cada folha")
    parser.add_argument("--fingerprint", action="store_true", help="imprime apenas o fingerprint")
    return parser


def _render(tree: ConfigTree, args: argparse.Namespace) -> str:
    if args.fingerprint:
        return tree.fingerprint
    if args.explain:
        payload = tree.explain()
    elif args.section:
        payload = tree.section(args.section)
    else:
        payload = tree.to_dict()
    if args.fmt == "json":
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return yaml.safe_dump(payload, allow_unicode=True, sort_keys=False).rstrip("\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    own, overrides = _split_overrides(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(own)

    try:
        schema = SchemaRegistry.from_mapping(load_file(Path(args.schema)))
        tree = resolve_config(
            schema,
            app_name=args.app_name,
            config_path=args.config,
            environ=dict(os.environ),
            argv=overrides,
        )
    except ConfigResolutionError as exc:
        print(f"Validação falhou com {len(exc.errors)} erro(s):", file=sys.stderr)
        for err in exc.errors:
            print(err.message, file=sys.stderr)
        return 1
    except (ConfigError, OSError) as exc:
        print(f"Validação falhou: {exc}", file=sys.stderr)
        return 1

    try:
        print(_render(tree, args))
    except KeyError as exc:
        print(f"Seção desconhecida: {exc.args[0]}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
