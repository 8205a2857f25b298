import pytest

from catdefense.progress import LEVEL_COUNT, LevelProgress, format_levels, parse_levels


def test_parse_levels():
    assert parse_levels("1 3 6") == {1, 3, 6}


def test_parse_ignores_junk_and_out_of_range():
    assert parse_levels("0 2 7 x  ") == {2}


def test_parse_reads_first_line_only():
    assert parse_levels("1\n2 3") == {1}


def test_parse_empty():
    assert parse_levels("") == frozenset()


def test_format_levels_sorted_with_trailing_space():
    assert format_levels({3, 1}) == "1 3 "


def test_format_drops_unknown_levels():
    assert format_levels({LEVEL_COUNT + 1}) == ""


def test_format_parse_round_trip():
    levels = {1, 2, 5}
    assert parse_levels(format_levels(levels)) == levels


def test_save_load_round_trip(tmp_path):
    target = tmp_path / "levels.txt"
    progress = LevelProgress({1})
    progress.unlock(4)
    progress.save(target)
    loaded = LevelProgress.load(target)
    assert loaded.unlocked == {1, 4}
    assert loaded.is_unlocked(4)
    assert not loaded.is_unlocked(2)


def test_missing_file_opens_first_level(tmp_path):
    progress = LevelProgress.load(tmp_path / "absent.txt")
    assert progress.is_unlocked(1)
    assert not progress.is_unlocked(2)


def test_unlock_out_of_range():
    progress = LevelProgress()
    with pytest.raises(ValueError):
        progress.unlock(LEVEL_COUNT + 1)
    with pytest.raises(ValueError):
        progress.unlock(0)
    assert progress.unlocked == set()


def test_is_unlocked_unknown_level():
    assert not LevelProgress({1}).is_unlocked(0)