import re

import pytest

from solong.mapfile import MapError
from solong.validation import (
    Point,
    check_extension,
    collectibles_reachable,
    count_tile,
    exit_reachable,
    find_tile,
    grid_size,
    has_valid_chars,
    is_rectangular,
    is_walled,
    load_and_validate,
    validate_map,
)

VALID = ["11111", "1PCE1", "11111"]
VALID_BONUS = ["1111111", "1PCX0E1", "1111111"]


def _write(tmp_path, name, rows):
    path = tmp_path / name
    path.write_text("\n".join(rows) + "\n")
    return path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("map.ber", True),
        ("maps/map.ber", True),
        ("map.berx", False),
        ("map", False),
        ("map.txt", False),
        ("a.b.ber", False),
    ],
)
def test_check_extension(path, expected):
    assert check_extension(path) is expected


def test_is_rectangular():
    assert is_rectangular(VALID) is True
    assert is_rectangular(["111", "11", "111"]) is False
    assert is_rectangular([]) is False


def test_is_walled():
    assert is_walled(VALID) is True
    assert is_walled(["11011", "1PCE1", "11111"]) is False
    assert is_walled(["11111", "0PCE1", "11111"]) is False
    assert is_walled(["11111", "1PCE0", "11111"]) is False
    assert is_walled(["11111", "1PCE1", "11101"]) is False


def test_has_valid_chars():
    assert has_valid_chars(VALID, "01CEP") is True
    assert has_valid_chars(VALID_BONUS, "01CEP") is False
    assert has_valid_chars(VALID_BONUS, "01CEPX") is True


def test_count_tile_covers_every_cell():
    tiles = set("".join(VALID_BONUS))
    total = sum(count_tile(VALID_BONUS, tile) for tile in tiles)
    assert total == sum(len(row) for row in VALID_BONUS)
    assert count_tile(VALID, "X") == 0


def test_find_tile_returns_matching_cell():
    point = find_tile(VALID, "P")
    assert VALID[point.y][point.x] == "P"
    assert find_tile(VALID, "X") is None


def test_find_tile_returns_last_occurrence():
    rows = ["1C1", "1C1", "1C1"]
    point = find_tile(rows, "C")
    assert point.y == len(rows) - 1
    assert rows[point.y][point.x] == "C"


def test_grid_size():
    assert grid_size(VALID) == Point(len(VALID[0]), len(VALID))
    assert grid_size([]) == Point(0, 0)


def test_collectible_behind_exit_is_not_reachable():
    rows = ["111111", "1PEC11", "111111"]
    start = find_tile(rows, "P")
    assert collectibles_reachable(rows, start) is False
    assert exit_reachable(rows, start) is True


def test_walled_off_exit_is_not_reachable():
    rows = ["1111111", "1PC1E11", "1111111"]
    start = find_tile(rows, "P")
    assert collectibles_reachable(rows, start) is True
    assert exit_reachable(rows, start) is False


def test_flood_does_not_change_rows():
    rows = list(VALID)
    start = find_tile(rows, "P")
    assert collectibles_reachable(rows, start) is True
    assert exit_reachable(rows, start) is True
    assert rows == VALID


@pytest.mark.parametrize(
    "rows, bonus, message",
    [
        (["11111", "1PCE", "11111"], False, "Map isn't rectangular"),
        (["11111", "0PCE1", "11111"], False, "Map isn't surrounded by walls"),
        (["11111", "1PCZ1", "1E111"], False, "Map isn't surrounded by walls"),
        (["11111", "1PCZE1"[:5], "11111"], False, "Map contains different characters"),
        (VALID_BONUS, False, "Map contains different characters"),
        (["11111", "1P0E1", "11111"], False, "Map doesn't contain a collectible"),
        (VALID, True, "Map doesn't contain an enemy"),
        (["11111", "1PC01", "11111"], False, "Map doesn't contain an exit"),
        (["111111", "1PCEE1", "111111"], False, "Map contains more than one exit"),
        (["11111", "10CE1", "11111"], False, "Map doesn't contain a starting position"),
        (
            ["111111", "1PPCE1", "111111"],
            False,
            "Map contains more than one starting position",
        ),
        (["111111", "1PEC11", "111111"], False, "Invalid path"),
        (["1111111", "1PC1E11", "1111111"], False, "Invalid path"),
        ([], False, "Map is empty"),
    ],
)
def test_validate_map_errors(rows, bonus, message):
    with pytest.raises(MapError, match=re.escape(message)):
        validate_map(rows, bonus)


def test_load_and_validate_round_trip(tmp_path):
    path = _write(tmp_path, "level.ber", VALID)
    assert load_and_validate(path) == VALID


def test_load_and_validate_bonus(tmp_path):
    path = _write(tmp_path, "level.ber", VALID_BONUS)
    assert load_and_validate(path, bonus=True) == VALID_BONUS
    with pytest.raises(MapError, match="different characters"):
        load_and_validate(path, bonus=False)


def test_load_and_validate_wrong_extension(tmp_path):
    path = _write(tmp_path, "level.txt", VALID)
    with pytest.raises(MapError, match=re.escape("File isn't a .ber file")):
        load_and_validate(path)


def test_load_and_validate_missing_file(tmp_path):
    with pytest.raises(MapError, match="No such file or directory"):
        load_and_validate(tmp_path / "missing.ber")


def test_load_and_validate_invalid_path(tmp_path):
    path = _write(tmp_path, "level.ber", ["111111", "1PEC11", "111111"])
    with pytest.raises(MapError, match="Invalid path"):
        load_and_validate(path)