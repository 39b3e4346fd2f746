from __future__ import annotations

import argparse
import json
from typing import Any, List, Optional

from pydantic import BaseModel

from .config import EngineConfig
from .models import ChecklistKind, Stage
from .records import KIND_RECORD_MODELS
from .registry import registry

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401


class KindCatalogEntry(BaseModel):
    kind: ChecklistKind
    display_name: str
    stage: Stage
    quality: bool
    date_field: str
    date_format: str

    record_model: str
    rule_class: str
    rule_title: str


def build_catalog(config: Optional[EngineConfig] = None) -> List[KindCatalogEntry]:
    config = config or EngineConfig.default()
    entries: List[KindCatalogEntry] = []
    for cfg in config.catalog.kinds:
        rule_cls = registry.get(cfg.kind)
        entries.append(
            KindCatalogEntry(
                kind=cfg.kind,
                display_name=cfg.display_name,
                stage=cfg.stage,
                quality=cfg.quality,
                date_field=cfg.date_field,
                date_format=cfg.date_format.value,
                record_model=KIND_RECORD_MODELS[cfg.kind].__name__,
                rule_class=rule_cls.__name__,
                rule_title=getattr(rule_cls, "rule_title", ""),
            )
        )
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=False)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="List the configured checklist kinds and their review rules.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump(mode="json") for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
