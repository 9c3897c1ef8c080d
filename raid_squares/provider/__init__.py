from raid_squares.provider.demo import DemoRaidSimulator
from raid_squares.provider.game_state import GameStateProvider, InMemoryGameState, UnitRecord

__all__ = ["DemoRaidSimulator", "GameStateProvider", "InMemoryGameState", "UnitRecord"]
