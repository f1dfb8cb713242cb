import logging
from typing import Optional

import typer

from reti.REPORT.show_app import show_app
from reti.TIMESHEET.timesheet_app import (
    add_app, edit_days, get_app, import_legacy, init_store, remove_days, set_app
)
from reti.config import ConfigError, load_config
from reti.logging_handler import setup_logger
from reti.state import AppState, console

logger = logging.getLogger(__name__)

app = typer.Typer(help="Keep track of your working times.", no_args_is_help=True)
app.add_typer(show_app, name="show")
app.add_typer(add_app, name="add")
app.add_typer(get_app, name="get")
app.add_typer(set_app, name="set")
app.command("init")(init_store)
app.command("import")(import_legacy)
app.command("rm")(remove_days)
app.command("edit")(edit_days)


@app.callback()
def main_callback(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Storage file to use."),
    save_pretty: Optional[bool] = typer.Option(None, "--save-pretty/--save-compact", help="Indent the saved JSON."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
):
    """
    reti: record working times as legacy timesheet lines and report them.
    """
    try:
        config = load_config()
    except ConfigError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    try:
        setup_logger(log_level or config["log-level"], log_file=config["log-file"])
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    ctx.obj = AppState(
        storage_file=file or config["storage-file"],
        save_pretty=config["save-pretty"] if save_pretty is None else save_pretty,
        editor=config["editor"],
    )
    logger.debug("Use storage file: %s", ctx.obj.storage_file)


if __name__ == "__main__":
    app()
