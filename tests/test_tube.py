import pytest

from tubesort.colour import EMPTY, KNOWN_COLOURS, Colour
from tubesort.game import Move
from tubesort.tube import TopSegment, Tube

RED = Colour.Of("red")
BLUE = Colour.Of("blue")
GREEN = Colour.Of("green")


def labels(tube: Tube) -> list[str]:
  return [colour.label for colour in tube.cells]


@pytest.mark.parametrize("description, expected", [
  ("red, red, blue, green", ["red", "red", "blue", "green"]),
  ("empty, red, blue, green", ["empty", "red", "blue", "green"]),
  ("red, blue, green", ["empty", "red", "blue", "green"]),
  ("blue, green", ["empty", "empty", "blue", "green"]),
  ("RED, rEd, Blue    ,    Green      ", ["red", "red", "blue", "green"]),
  ("", ["empty", "empty", "empty", "empty"]),
  ("red, , blue", ["empty", "empty", "red", "blue"]),
  ("red, empty, blue, green", ["empty", "red", "blue", "green"]),
])
def test_from_text(description, expected):
  tube = Tube.FromText(description, 3)
  assert labels(tube) == expected
  assert tube.index == 3
  assert tube.size == 4


def test_from_text_with_palette_drops_unrecognized():
  tube = Tube.FromText("blue, green, unknown", 5, palette=KNOWN_COLOURS)
  assert labels(tube) == ["empty", "empty", "blue", "green"]


def test_from_text_ignores_colours_past_capacity():
  tube = Tube.FromText("red,red,red,red,blue", 0)
  assert labels(tube) == ["red", "red", "red", "red"]


def test_from_cells_settles_liquid():
  tube = Tube.FromCells([RED, EMPTY, BLUE, EMPTY], 1)
  assert tube.cells == [EMPTY, EMPTY, RED, BLUE]
  with pytest.raises(ValueError):
    Tube.FromCells([RED] * 5, 1)


@pytest.mark.parametrize("description, expected", [
  ("red, red, blue, green", TopSegment(RED, 0, 2)),
  ("empty, red, blue, green", TopSegment(RED, 1, 1)),
  ("red, blue, green", TopSegment(RED, 1, 1)),
  ("blue,blue,blue,blue", TopSegment(BLUE, 0, 4)),
  ("green, green", TopSegment(GREEN, 2, 2)),
  ("", None),
])
def test_top_segment(description, expected):
  assert Tube.FromText(description, 0).topSegment() == expected


@pytest.mark.parametrize("description, expected", [
  ("red,red,red,red", 1),
  ("red,blue,red,blue", 4),
  ("", 0),
  ("red, blue, blue", 2),
  ("red", 1),
  ("red, red, blue", 2),
])
def test_block_count(description, expected):
  assert Tube.FromText(description, 0).blockCount() == expected


@pytest.mark.parametrize("description, expected", [
  ("red,red,red,red", True),
  ("", True),
  ("red,red", False),
  ("red,red,red,blue", False),
])
def test_is_uniform(description, expected):
  assert Tube.FromText(description, 0).isUniform() == expected


def test_can_pour_from():
  tube = Tube.FromText("red, red, blue", 0)
  assert tube.canPourFrom(Move(0, 1, RED, 1))
  assert tube.canPourFrom(Move(0, 1, RED, 2))
  assert not tube.canPourFrom(Move(0, 1, RED, 3))   # Only two reds on top
  assert not tube.canPourFrom(Move(0, 1, BLUE, 1))  # Blue is underneath
  assert not tube.canPourFrom(Move(1, 0, RED, 1))   # Not the source
  assert not tube.canPourFrom(Move(0, 1, RED, 0))
  assert not Tube.FromText("", 0).canPourFrom(Move(0, 1, RED, 1))


def test_can_pour_into():
  tube = Tube.FromText("red, blue", 2)
  assert tube.canPourInto(Move(0, 2, RED, 1))
  assert tube.canPourInto(Move(0, 2, RED, 2))
  assert not tube.canPourInto(Move(0, 2, RED, 3))   # Only two spaces left
  assert not tube.canPourInto(Move(0, 2, BLUE, 1))  # Colour must match the top
  assert not tube.canPourInto(Move(2, 0, RED, 1))   # Not the destination

  empty = Tube.Empty(2)
  assert empty.canPourInto(Move(0, 2, GREEN, 4))
  assert not empty.canPourInto(Move(0, 2, GREEN, 5))

  full = Tube.FromText("red,red,red,red", 2)
  assert not full.canPourInto(Move(0, 2, RED, 1))


def test_pour_conserves_liquid():
  start = Tube.FromText("red, red", 0)
  end = Tube.FromText("red, red", 1)
  move = Move(0, 1, RED, 2)
  assert start.canPourFrom(move) and end.canPourInto(move)

  before = start.colourCount() + end.colourCount()
  start.applyPourFrom(move)
  end.applyPourInto(move)

  assert start.colourCount() + end.colourCount() == before
  assert start.cells == [EMPTY] * 4
  assert end.cells == [RED] * 4


def test_pour_into_empty_tube_fills_bottom():
  tube = Tube.Empty(3)
  tube.applyPourInto(Move(0, 3, BLUE, 2))
  assert tube.cells == [EMPTY, EMPTY, BLUE, BLUE]


def test_pour_from_leaves_rest_of_tube():
  tube = Tube.FromText("blue, red, blue, red", 0)
  tube.applyPourFrom(Move(0, 2, BLUE, 1))
  assert labels(tube) == ["empty", "red", "blue", "red"]


def test_describe_round_trip():
  tube = Tube.FromText(" Red, BLUE,,green", 0)
  text = tube.describe()
  assert text == "empty,red,blue,green"
  assert Tube.FromText(text, 0).describe() == text


def test_clone_is_independent():
  tube = Tube.FromText("red, red", 0)
  copy = tube.clone()
  copy.applyPourFrom(Move(0, 1, RED, 1))
  assert labels(tube) == ["empty", "empty", "red", "red"]
  assert copy != tube


def test_str():
  assert str(Tube.FromText("red, blue", 2)) == "2: (Empty, Empty, Red, Blue)"


@pytest.mark.parametrize("description, expected", [
  ("", 4),
  ("red", 3),
  ("blue, red, red", 1),
  ("red,red,red,red", 0),
])
def test_headroom(description, expected):
  assert Tube.FromText(description, 0).headroom() == expected
