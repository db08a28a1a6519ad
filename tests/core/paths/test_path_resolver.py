"""Testes do resolver de caminhos (chave bruta → caminho canônico)."""

import pytest

from layered_config.core.errors import UnknownPathError
from layered_config.core.paths import PathResolver, render_key, split_key
from layered_config.core.types import Layer, Notation
from layered_config.sources.env import env_var_names


@pytest.fixture
def resolver(app_schema):
    return PathResolver(app_schema)


def test_dotted_key_resolves_to_leaf(resolver):
    path = resolver.resolve("database.max.connections", Notation.DOTTED, Layer.FILE)
    assert path == ("database", "max", "connections")


def test_underscored_key_resolves_to_same_leaf(resolver):
    path = resolver.resolve("database_max_connections", Notation.UNDERSCORED, Layer.UPPER_ENV)
    assert path == ("database", "max", "connections")


def test_underscored_key_is_case_insensitive(resolver):
    path = resolver.resolve("DATABASE_Port", Notation.UNDERSCORED, Layer.UPPER_ENV)
    assert path == ("database", "port")


def test_dotted_key_is_case_sensitive(resolver):
    with pytest.raises(UnknownPathError):
        resolver.resolve("Database.port", Notation.DOTTED, Layer.LOWER_ENV)


def test_typo_reports_layer_and_raw_key(resolver):
    with pytest.raises(UnknownPathError) as exc:
        resolver.resolve("databse.port", Notation.DOTTED, Layer.FILE)
    assert exc.value.layer is Layer.FILE
    assert exc.value.raw_key == "databse.port"
    assert "databse.port" in exc.value.message


def test_partial_path_ending_at_group_is_rejected(resolver):
    with pytest.raises(UnknownPathError) as exc:
        resolver.resolve("database.max", Notation.DOTTED, Layer.CLI)
    assert "grupo" in exc.value.reason


def test_overshoot_past_leaf_is_rejected(resolver):
    with pytest.raises(UnknownPathError) as exc:
        resolver.resolve("port_extra", Notation.UNDERSCORED, Layer.UPPER_ENV)
    assert "folha" in exc.value.reason


@pytest.mark.parametrize("raw_key", ["", "database..port", "port.", ".port"])
def test_empty_segments_are_rejected(resolver, raw_key):
    with pytest.raises(UnknownPathError):
        resolver.resolve(raw_key, Notation.DOTTED, Layer.FILE)


def test_resolve_for_layer_picks_notation(resolver):
    assert resolver.resolve_for_layer("database_port", Layer.UPPER_ENV) == ("database", "port")
    with pytest.raises(UnknownPathError):
        resolver.resolve_for_layer("database_port", Layer.LOWER_ENV)


def test_every_leaf_round_trips_through_both_env_conventions(app_schema, resolver):
    """Para toda folha a.b.c, `prefix.a.b.c` e `PREFIX_A_B_C` resolvem para o mesmo caminho."""
    for path in app_schema.leaf_paths():
        lower, upper = env_var_names(path, "app")
        assert lower == "app." + render_key(path, Notation.DOTTED)
        assert upper == "APP_" + "_".join(seg.upper() for seg in path)

        from_lower = resolver.resolve(lower[len("app."):], Notation.DOTTED, Layer.LOWER_ENV)
        from_upper = resolver.resolve(upper[len("APP_"):].lower(), Notation.UNDERSCORED, Layer.UPPER_ENV)
        assert from_lower == from_upper == path


def test_split_key_uses_notation_separator():
    assert split_key("a.b", Notation.DOTTED) == ("a", "b")
    assert split_key("A_B", Notation.UNDERSCORED) == ("a", "b")
