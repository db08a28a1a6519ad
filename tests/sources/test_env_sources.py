"""Testes das Sources de ambiente (camadas 3 e 4)."""

import pytest

from layered_config.core.errors import ConfigResolutionError, SourceFormatError
from layered_config.core.types import Layer
from layered_config.sources import LowercaseEnvSource, UppercaseEnvSource, env_var_names


def test_lowercase_source_keeps_key_verbatim(precedence_environ):
    entries = LowercaseEnvSource(precedence_environ, "app").produce()
    assert [(e.layer, e.raw_key, e.raw_value) for e in entries] == [(Layer.LOWER_ENV, "port", "5000")]


def test_uppercase_source_lowercases_remainder(precedence_environ):
    entries = UppercaseEnvSource(precedence_environ, "app").produce()
    assert [(e.layer, e.raw_key, e.raw_value) for e in entries] == [(Layer.UPPER_ENV, "port", "6000")]


def test_unrelated_variables_are_ignored():
    environ = {"PATH": "/bin", "APPLE": "1", "app": "x", "OTHER_PORT": "2"}
    assert LowercaseEnvSource(environ, "app").produce() == []
    assert UppercaseEnvSource(environ, "app").produce() == []


def test_prefix_is_derived_from_app_name_case():
    environ = {"myapp.database.port": "1", "MYAPP_DATABASE_PORT": "2", "MyApp.debug": "true"}
    lower = LowercaseEnvSource(environ, "MyApp")
    upper = UppercaseEnvSource(environ, "MyApp")
    assert lower.prefix == "myapp."
    assert upper.prefix == "MYAPP_"
    assert [e.raw_key for e in lower.produce()] == ["database.port"]
    assert [e.raw_key for e in upper.produce()] == ["database_port"]


def test_lowercase_source_does_not_normalize_case():
    entries = LowercaseEnvSource({"app.Database.Port": "1"}, "app").produce()
    assert entries[0].raw_key == "Database.Port"


def test_entries_are_sorted_by_variable_name():
    environ = {"APP_PORT": "1", "APP_DEBUG": "yes", "APP_DATABASE_HOST": "h"}
    keys = [e.raw_key for e in UppercaseEnvSource(environ, "app").produce()]
    assert keys == ["database_host", "debug", "port"]


def test_non_string_values_are_format_errors():
    with pytest.raises(ConfigResolutionError) as exc:
        UppercaseEnvSource({"APP_PORT": 1, "APP_DEBUG": None, "APP_NAME": "ok"}, "app").produce()
    errors = exc.value.errors
    assert len(errors) == 2
    assert all(isinstance(e, SourceFormatError) and e.layer is Layer.UPPER_ENV for e in errors)


def test_env_var_names():
    assert env_var_names(("database", "max", "connections"), "app") == (
        "app.database.max.connections",
        "APP_DATABASE_MAX_CONNECTIONS",
    )


def test_non_string_names_are_format_errors():
    for source in (LowercaseEnvSource({1: "x", "APP_PORT": "1"}, "app"), UppercaseEnvSource({1: "x", "APP_PORT": "1"}, "app")):
        with pytest.raises(ConfigResolutionError) as exc:
            source.produce()
        (err,) = exc.value.errors
        assert isinstance(err, SourceFormatError)
        assert err.layer is source.layer
        assert err.key == "1"
