"""CLI entry point for erd-layout."""

import json
import logging
import sys
from dataclasses import replace

import click

from erd_layout.config import LayoutConfig
from erd_layout.ir.schema import SchemaError
from erd_layout.layout.engine import layout_entities
from erd_layout.parsers import parse
from erd_layout.renderers.json_renderer import JsonRenderer
from erd_layout.types import LayoutType, PairPolicy

_LAYOUT_CHOICES = [t.value for t in LayoutType] + ["force"]
_PAIR_CHOICES = [p.value for p in PairPolicy]


def _load_config(path: str | None) -> LayoutConfig:
    if path is None:
        return LayoutConfig()
    try:
        with open(path) as f:
            raw = json.load(f)
    except OSError as e:
        click.echo(f"error: cannot read '{path}': {e}", err=True)
        sys.exit(1)
    except json.JSONDecodeError as e:
        click.echo(f"error: config '{path}' is not valid JSON: {e}", err=True)
        sys.exit(1)
    if not isinstance(raw, dict):
        click.echo(f"error: config '{path}' must be a JSON object", err=True)
        sys.exit(1)
    try:
        return LayoutConfig.from_mapping(raw)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--layout", "-l", "layout", type=click.Choice(_LAYOUT_CHOICES), default=None, help="Layout strategy")
@click.option("--config", "-c", "config_path", type=str, default=None, help="JSON file with layout options")
@click.option("--seed", "-s", "seed", type=int, default=None, help="Seed for the force-directed start positions")
@click.option("--compact", is_flag=True, help="Compact column packing for the box layout")
@click.option("--split-isolated", is_flag=True, help="Lay out isolated tables separately from linked ones")
@click.option("--pair-policy", "pair_policy", type=click.Choice(_PAIR_CHOICES), default=None, help="Duplicate edge handling")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log diagnostics to stderr")
def main(
    input: str | None,
    layout: str | None,
    config_path: str | None,
    seed: int | None,
    compact: bool,
    split_isolated: bool,
    pair_policy: str | None,
    output: str | None,
    verbose: bool,
) -> None:
    """Entity-relationship schema (JSON) to positioned diagram nodes and edges (JSON)."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    config = _load_config(config_path)
    if layout is not None:
        config = config.with_layout(layout)
    if seed is not None:
        config = replace(config, seed=seed, force=replace(config.force, seed=seed))
    if compact:
        config = replace(config, box=replace(config.box, compact=True))
    if split_isolated:
        config = replace(config, split_isolated=True)
    if pair_policy is not None:
        config = replace(config, pair_policy=PairPolicy.parse(pair_policy))

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        entities = parse(text)
    except SchemaError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    result = layout_entities(entities, config)
    rendered = JsonRenderer().render(result)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
