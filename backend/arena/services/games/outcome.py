from arena.models import Move, Result

# Each move beats exactly one other move
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


def resolve(mine: Move, theirs: Move) -> Result:
    """Result of ``mine`` against ``theirs`` from the point of view of ``mine``."""
    if mine == theirs:
        return Result.TIE
    if BEATS[mine] == theirs:
        return Result.WIN
    return Result.LOSE


def parse_move(value) -> Move:
    """Convert a wire value to a ``Move``; raises ValueError for anything else."""
    if isinstance(value, Move):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a move: {value!r}")
    return Move(value.strip().lower())
