class MazeError(ValueError):
    """Base class for caller contract violations."""


class InvalidDimensions(MazeError):
    pass


class InvalidStart(MazeError):
    """Generator start cell is out of bounds or not on an even row/column."""


class InvalidEndpoint(MazeError):
    """Solver start or end cell is out of bounds or a wall."""
