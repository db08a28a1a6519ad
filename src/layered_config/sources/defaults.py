"""Source da camada 1: defaults compilados no schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from layered_config.core.coerce import render_value
from layered_config.core.schema import SchemaRegistry
from layered_config.core.types import Layer, RawEntry, dotted


@dataclass(frozen=True)
class DefaultsSource:
    """Uma entrada por folha: chave canônica com `.` e default serializado."""

    schema: SchemaRegistry
    layer: Layer = Layer.DEFAULTS

    def produce(self) -> List[RawEntry]:
        return [
            RawEntry(layer=self.layer, raw_key=dotted(path), raw_value=render_value(leaf.default))
            for path, leaf in self.schema.leaves()
        ]
