"""CLI entry point for testwave.

Usage:
    testwave [options] [@config-file(s)] file(s)
    python -m testwave [options] [@config-file(s)] file(s)

Option handling belongs to CommandRunner, so click passes every argument
through untouched and only supplies the console entry point.
"""

import click

from .executor import TestwaveApp
from .options import VariablesMap
from .runner import CommandRunner

CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "help_option_names": [],
}


@click.command(context_settings=CONTEXT_SETTINGS, add_help_option=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, args: tuple[str, ...]):
    """Test the given files and exit with the number of failures."""
    variables = VariablesMap()
    app = TestwaveApp(variables)
    runner = CommandRunner(app, variables, prog="testwave")
    ctx.exit(runner.run(args))


def main():
    """Main CLI entry point."""
    cli(prog_name="testwave")


if __name__ == "__main__":
    main()
