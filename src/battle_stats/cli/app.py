from __future__ import annotations

import typer

from battle_stats.cli.players import app as players_app
from battle_stats.cli.query import categories_cmd, hero_cmd, query_cmd
from battle_stats.core.config import settings
from battle_stats.core.logs import configure_logging

app = typer.Typer(no_args_is_help=True, help="Query and summarize battle-record match history.")
app.command("query")(query_cmd)
app.command("categories")(categories_cmd)
app.command("hero")(hero_cmd)
app.add_typer(players_app, name="players")


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to LOG_LEVEL, then INFO)."
    ),
) -> None:
    configure_logging(log_level or settings.log_level)
