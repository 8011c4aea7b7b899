"""
dbcore CLI - Inspect the active checking profile and run the demos.

Commands:
    dbcore info   Show the resolved profile and configuration
    dbcore demo   Run the demo scenarios under the active profile
"""

from __future__ import annotations

import json
import logging
import sys

import click

from dbcore import ACTIVE_PROFILE, __version__
from dbcore.config import get_config


@click.group()
@click.version_option(__version__)
def main():
    """dbcore - Design-by-Contract checks for Python."""
    logging.basicConfig(
        level=get_config().log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def info(as_json: bool):
    """Show the active checking profile.

    The profile is fixed when dbcore is imported; set DBCORE_PROFILE
    (auto, checked, unchecked) or run Python with -O to change it.
    """
    config = get_config()
    data = {
        "profile": ACTIVE_PROFILE.value,
        "configured": config.profile,
        "debug": __debug__,
        "optimize": sys.flags.optimize,
        "emit_span_events": config.emit_span_events,
    }

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"Profile:          {data['profile']}")
    click.echo(f"Configured:       {data['configured']}")
    click.echo(f"__debug__:        {data['debug']}")
    click.echo(f"Optimize level:   {data['optimize']}")
    click.echo(f"Span events:      {data['emit_span_events']}")


@main.command()
@click.argument(
    "name",
    type=click.Choice(["queue", "bank", "all"]),
    default="all",
)
def demo(name: str):
    """Run a demo scenario (queue, bank, or all)."""
    from dbcore.demo.scenarios import DEMOS
    from dbcore.errors import ContractViolationError

    names = list(DEMOS) if name == "all" else [name]
    for index, demo_name in enumerate(names):
        if index:
            click.echo("")
        click.echo(f"--> Running '{demo_name}'")
        try:
            for line in DEMOS[demo_name]():
                click.echo(line)
        except ContractViolationError as e:
            raise click.ClickException(f"Contract violation in '{demo_name}': {e}")


if __name__ == "__main__":
    main()
