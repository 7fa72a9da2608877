"""Game modules for the casino engine."""

from .dice import DiceGame, dice_game
from .crash import CrashGame, crash_game
from .roulette import RouletteGame, roulette_game, ROULETTE_NUMBERS
from .slots import SlotsGame, slots_game
from . import blackjack, poker

__all__ = [
    "DiceGame",
    "dice_game",
    "CrashGame",
    "crash_game",
    "RouletteGame",
    "roulette_game",
    "ROULETTE_NUMBERS",
    "SlotsGame",
    "slots_game",
    "blackjack",
    "poker",
]
