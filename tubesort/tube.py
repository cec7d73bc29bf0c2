import logging
from typing import TYPE_CHECKING, Iterable, NamedTuple

from tubesort.colour import EMPTY, Colour, formatColour
from tubesort.constant import TUBE_SIZE

if TYPE_CHECKING:
  from tubesort.game import Move

logger = logging.getLogger(__name__)


class TopSegment(NamedTuple):
  colour: Colour
  position: int   # Index of the first filled cell, counted from the mouth
  blockSize: int  # Length of the run of `colour` starting at `position`


class Tube:
  """A fixed capacity stack of colour cells.

  Index 0 is the mouth, where pouring happens, and index `size - 1` is the bottom.
  Liquid always rests on the bottom: every empty cell sits above every filled cell.
  """
  cells: list[Colour]
  index: int
  size: int

  def __init__(self, cells: list[Colour], index: int, size: int = TUBE_SIZE) -> None:
    self.cells = cells
    self.index = index
    self.size = size

  @staticmethod
  def Empty(index: int, size: int = TUBE_SIZE) -> "Tube":
    return Tube([EMPTY] * size, index, size)

  @staticmethod
  def FromText(description: str, index: int, size: int = TUBE_SIZE, palette: set[str] = None) -> "Tube":
    """Reads comma separated colours, listed from the mouth to the bottom.

    Short descriptions are padded with empty cells at the mouth. Unrecognized or
    blank tokens read as empty cells.
    """
    tokens = description.split(",")
    if len(tokens) > size:
      logger.warning("Tube %d lists %d colours but holds %d; ignoring the rest: %r", index, len(tokens), size, description)
      tokens = tokens[:size]
    return Tube.FromCells([Colour.Of(token, palette) for token in tokens], index, size)

  @staticmethod
  def FromCells(cells: Iterable[Colour], index: int, size: int = TUBE_SIZE) -> "Tube":
    # Let anything listed above a gap settle onto the liquid below it
    filled = [colour for colour in cells if not colour.isEmpty()]
    if len(filled) > size:
      raise ValueError(f"Tube {index} cannot hold {len(filled)} colours (size {size})")
    return Tube([EMPTY] * (size - len(filled)) + filled, index, size)

  def clone(self) -> "Tube":
    return Tube(self.cells[:], self.index, self.size)

  def topSegment(self) -> TopSegment | None:
    for position, colour in enumerate(self.cells):
      if colour.isEmpty():
        continue
      blockSize = 1
      while position + blockSize < self.size and self.cells[position + blockSize] == colour:
        blockSize += 1
      return TopSegment(colour, position, blockSize)
    return None

  def headroom(self) -> int:
    top = self.topSegment()
    return top.position if top else self.size
  def isEmpty(self) -> bool:
    return self.topSegment() is None
  def isUniform(self) -> bool:
    first = self.cells[0]
    return all(colour == first for colour in self.cells)

  def canPourFrom(self, move: "Move") -> bool:
    if move.startTube != self.index or move.quantity < 1:
      return False
    top = self.topSegment()
    if not top or top.position + move.quantity > self.size:
      return False
    return all(colour == move.colour for colour in self.cells[top.position:top.position + move.quantity])
  def canPourInto(self, move: "Move") -> bool:
    if move.endTube != self.index or move.quantity < 1:
      return False
    top = self.topSegment()
    if top:
      return top.colour == move.colour and top.position >= move.quantity
    return move.quantity <= self.size

  # Both pours assume the move has already been validated against this tube
  def applyPourFrom(self, move: "Move") -> None:
    top = self.topSegment()
    for i in range(top.position, top.position + move.quantity):
      self.cells[i] = EMPTY
  def applyPourInto(self, move: "Move") -> None:
    top = self.topSegment()
    end = top.position if top else self.size
    for i in range(end - move.quantity, end):
      self.cells[i] = move.colour

  def blockCount(self) -> int:
    """Counts runs of liquid: a new colour closes the run above it, and so does the first gap below it."""
    blocks = 0
    inProgress: Colour = None
    for colour in self.cells:
      if colour.isEmpty():
        if inProgress:
          blocks += 1
          inProgress = None
      elif not inProgress:
        inProgress = colour
      elif colour != inProgress:
        blocks += 1
        inProgress = colour
    if inProgress:
      blocks += 1
    return blocks

  def colourCount(self) -> int:
    return sum(1 for colour in self.cells if not colour.isEmpty())

  def key(self) -> tuple[str, ...]:
    return tuple(colour.label for colour in self.cells)
  def describe(self) -> str:
    return ",".join(colour.label for colour in self.cells)
  def format(self, spaceIndex: int, ljust=0) -> str:
    colour = self.cells[spaceIndex]
    text = "-" if colour.isEmpty() else colour.label
    return formatColour(colour, text=text, ljust=ljust)

  def __str__(self) -> str:
    return f"{self.index}: (" + ", ".join(colour.displayName() for colour in self.cells) + ")"
  def __repr__(self) -> str:
    return f"Tube({self.index}, {self.describe()!r})"
  def __eq__(self, other: object) -> bool:
    if isinstance(other, Tube):
      return self.index == other.index and self.cells == other.cells
    return False
