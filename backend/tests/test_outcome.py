import itertools

import pytest

from arena.models import Move, Result
from arena.services.games.outcome import resolve, parse_move


def test_equal_moves_tie():
    for move in Move:
        assert resolve(move, move) == Result.TIE


def test_resolution_is_complementary():
    for a, b in itertools.permutations(Move, 2):
        assert {resolve(a, b), resolve(b, a)} == {Result.WIN, Result.LOSE}


def test_only_three_winning_pairs():
    winners = {(a, b) for a, b in itertools.product(Move, Move) if resolve(a, b) == Result.WIN}
    assert winners == {
        (Move.ROCK, Move.SCISSORS),
        (Move.SCISSORS, Move.PAPER),
        (Move.PAPER, Move.ROCK),
    }


def test_parse_move_accepts_wire_values():
    assert parse_move('rock') is Move.ROCK
    assert parse_move(' Paper ') is Move.PAPER
    assert parse_move(Move.SCISSORS) is Move.SCISSORS


@pytest.mark.parametrize('value', ['lizard', '', None, 3, {'move': 'rock'}])
def test_parse_move_rejects_anything_else(value):
    with pytest.raises(ValueError):
        parse_move(value)
