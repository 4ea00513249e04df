"""Custom exceptions for mancala"""


class MancalaError(Exception):
    """Base exception for all mancala errors"""
    pass


class InvalidStateError(MancalaError, ValueError):
    """Game state is malformed (board length, counters, player)"""
    pass


class InvalidPitError(MancalaError, ValueError):
    """Pit index outside the small-pit range"""
    pass


class IllegalMoveError(MancalaError):
    """Move is well-formed but not playable in the given state"""

    def __init__(self, pit, legal):
        self.pit = pit
        self.legal = list(legal)
        super().__init__(f"Illegal move {pit}. Legal: {self.legal}")


class UnknownModeError(MancalaError):
    """Unrecognized game mode or agent name"""
    pass
