from __future__ import annotations

import json

import typer

from battle_stats.core.config import settings
from battle_stats.heroes.lookup import HeroTable
from battle_stats.history.categories import category_name, category_options
from battle_stats.history.query import query_battle_data


def query_cmd(
    player_id: str = typer.Option(..., "--player-id", help="Upstream player id."),
    category: str = typer.Option(
        "1",
        "--category",
        help="1 all, 2 ranked, 3 top-tier, 4 matches, 5 rooms. Unknown codes mean all.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
    limit: int = typer.Option(20, "--limit", help="Max games to print in text mode."),
) -> None:
    """Fetch every sub-mode of a category, merge, and print summary + recent games."""

    try:
        result = query_battle_data(player_id, category)
    except RuntimeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    s = result.summary
    typer.echo(
        " ".join(
            [
                f"{category_name(category)}:",
                f"games={s.total_games}",
                f"win_rate={s.win_rate}",
                f"avg_kda={s.avg_kda}",
                f"wins={s.total_wins}",
                f"losses={s.total_loss}",
                f"modes={result.modes_count}",
            ]
        )
    )
    if result.message:
        typer.echo(result.message)

    for game in result.recent_games[: max(0, limit)]:
        typer.echo(
            f"  {game.index:>3}. {game.time}  {game.hero_name}  {game.kda}  "
            f"{game.result}  {game.mode}  {game.score}"
        )


def categories_cmd() -> None:
    """List the category codes accepted by `query`."""

    for option in category_options():
        typer.echo(f"{option['value']}  {option['label']}")


def hero_cmd(
    hero_id: int = typer.Option(..., "--hero-id", help="Hero id as reported by the API."),
) -> None:
    """Show the hero table entry for an id."""

    info = HeroTable.from_json_file(settings.hero_list_path).hero_info(hero_id)
    typer.echo(json.dumps(info.to_dict(), ensure_ascii=False))
