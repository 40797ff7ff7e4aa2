from models.game_snapshot import GameSnapshot

__all__ = ["GameSnapshot"]
