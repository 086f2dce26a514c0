"""CLI entrypoint for sysreport."""

from __future__ import annotations

import logging

import typer

from core.errors import ReportWriteError
from ui.cli import commands

logger = logging.getLogger("sysreport.cli")

app = typer.Typer(help="Print runtime and host system information", add_completion=False)


@app.command(
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def report_cmd(ctx: typer.Context) -> None:
    """Collect and print the system report. Arguments are ignored."""
    if ctx.args:
        logger.debug("Ignoring arguments: %s", ctx.args)
    try:
        commands.report()
    except ReportWriteError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
