from __future__ import annotations

import typer

from battle_stats.cli.common import session_scope
from battle_stats.players.saved import list_saved_players, remove_saved_player, save_player

app = typer.Typer(help="Manage the saved-players list.")


@app.command("save")
def save_cmd(
    player_id: str = typer.Option(..., "--player-id", help="Upstream player id."),
    nickname: str = typer.Option("", "--nickname", help="Display note for the player."),
) -> None:
    """Save a player id, or refresh its nickname and last-used time."""

    with session_scope() as session:
        player = save_player(session, player_id, nickname)
        typer.echo(f"Saved player_id={player.player_id} nickname={player.nickname!r}")


@app.command("list")
def list_cmd() -> None:
    """List saved players, most recently used first."""

    with session_scope() as session:
        players = list_saved_players(session)
        if not players:
            typer.echo("No saved players.")
            return
        for p in players:
            typer.echo(f"{p.player_id}  {p.nickname}  last_used={p.last_used_at:%Y-%m-%d %H:%M}")


@app.command("remove")
def remove_cmd(
    player_id: str = typer.Option(..., "--player-id", help="Upstream player id."),
) -> None:
    """Remove a saved player."""

    with session_scope() as session:
        removed = remove_saved_player(session, player_id)

    if not removed:
        typer.echo(f"player_id={player_id} was not saved.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Removed player_id={player_id}")
