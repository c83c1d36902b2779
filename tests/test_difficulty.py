import pytest

from snake_arcade.difficulty import (
    DIFFICULTY_TABLE, Difficulty, base_interval, points_for, settings_for,
)


def test_table_values():
    assert (base_interval(Difficulty.EASY), points_for(Difficulty.EASY)) == (200, 1)
    assert (base_interval(Difficulty.MEDIUM), points_for(Difficulty.MEDIUM)) == (130, 2)
    assert (base_interval(Difficulty.HARD), points_for(Difficulty.HARD)) == (80, 3)


def test_harder_is_faster_and_pays_more():
    easy, medium, hard = (settings_for(d) for d in Difficulty)
    assert easy.tick_interval > medium.tick_interval > hard.tick_interval
    assert easy.points < medium.points < hard.points


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DIFFICULTY_TABLE[Difficulty.EASY] = None


@pytest.mark.parametrize("raw,expected", [
    ("easy", Difficulty.EASY),
    (" Hard ", Difficulty.HARD),
    ("MEDIUM", Difficulty.MEDIUM),
])
def test_parse(raw, expected):
    assert Difficulty.parse(raw) is expected


def test_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Difficulty.parse("nightmare")
