"""
Invaders exceptions
"""


class InvadersError(Exception):
    """
    Base class for every error raised by the game.
    """


class InvalidElapsedTime(InvadersError, ValueError):
    """
    Raised when the frame driver passes a negative or non-finite delta.
    """


class InvalidWorldState(InvadersError, ValueError):
    """
    Raised when the round state holds values the simulation cannot advance.
    """


class InvalidSettings(InvadersError, ValueError):
    """
    Raised when a settings dictionary cannot be turned into GameSettings.
    """
