# src/layered_config/sources/__init__.py
"""
Sources (adapters de camada) da resolução de configuração.

Cada Source recebe uma entrada externa já materializada e a converte em
`RawEntry` da sua camada fixa:

    - DefaultsSource      → camada 1, a partir do schema
    - FileSource          → camada 2, a partir de um mapa aninhado (YAML/JSON)
    - LowercaseEnvSource  → camada 3, `{app}.{a}.{b}`
    - UppercaseEnvSource  → camada 4, `{APP}_{A}_{B}`
    - CliSource           → camada 5, `--a.b valor`
"""

from .base import Source
from .cli import CliSource, cli_flag
from .defaults import DefaultsSource
from .env import LowercaseEnvSource, UppercaseEnvSource, env_var_names
from .file import FileSource
from .loader import load_file

__all__ = [
    "Source",
    "DefaultsSource",
    "FileSource",
    "LowercaseEnvSource",
    "UppercaseEnvSource",
    "CliSource",
    "cli_flag",
    "env_var_names",
    "load_file",
]
