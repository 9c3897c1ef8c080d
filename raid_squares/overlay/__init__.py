from raid_squares.overlay.squares_overlay import SquaresOverlay

__all__ = ["SquaresOverlay"]
