from battle_stats.db.models.saved_player import SavedPlayer

__all__ = [
    "SavedPlayer",
]
