from collections import defaultdict
import itertools
import logging
from typing import NamedTuple

from colorama import Style

from tubesort.colour import KNOWN_COLOURS, Colour
from tubesort.constant import MIN_TUBES, NUM_BUFFER_TUBES, TUBE_SIZE
from tubesort.tube import Tube

logger = logging.getLogger(__name__)


class TubeCountError(ValueError):
  """Raised when a game is set up with too few tubes to be playable."""

class TubeIndexError(ValueError):
  """Raised when setting up a tube the game doesn't have."""


class Move(NamedTuple):
  """Pour `quantity` cells of `colour` from the top of `startTube` onto `endTube`."""
  startTube: int
  endTube: int
  colour: Colour
  quantity: int

  def __str__(self) -> str:
    return f"{self.startTube} -> {self.endTube}: {self.colour} x {self.quantity}"


class MoveRecord(NamedTuple):
  """One entry of the move log. Games cloned from each other share the entries they have in common."""
  number: int
  move: Move
  prev: "MoveRecord | None"


class Game:
  tubes: list[Tube]
  lastMove: MoveRecord | None # Newest entry of the move log, linked back to the first
  currentMove: int
  colours: set[Colour]   # Every colour seen while setting up the tubes. Replaced, never mutated, as clones share it
  tubeSize: int
  strictColours: bool    # Only colours in KNOWN_COLOURS are recognized when set

  @staticmethod
  def Create(descriptions: list[str], numTubes: int = None, tubeSize: int = TUBE_SIZE, strictColours=False) -> "Game":
    """Builds a game from one description per tube. Tubes past the end of `descriptions` start empty."""
    newGame = Game(tubeSize=tubeSize, strictColours=strictColours)
    newGame.initTubes(numTubes if numTubes is not None else len(descriptions))
    for index, description in enumerate(descriptions):
      newGame.setTubeContents(index, description)
    return newGame

  def __init__(self, numTubes: int = None, tubeSize: int = TUBE_SIZE, strictColours=False) -> None:
    self.tubes = []
    self.lastMove = None
    self.currentMove = 0
    self.colours = set()
    self.tubeSize = tubeSize
    self.strictColours = strictColours
    if numTubes is not None:
      self.initTubes(numTubes)

  def initTubes(self, numTubes: int) -> None:
    if numTubes < MIN_TUBES:
      raise TubeCountError(f"Must have at least {MIN_TUBES} tubes to play a valid game, not {numTubes}")
    self.tubes = [Tube.Empty(index, self.tubeSize) for index in range(numTubes)]
    self.lastMove = None
    self.currentMove = 0
    self.colours = set()

  def setTubeContents(self, index: int, description: str) -> None:
    if not 0 <= index < self.getNumTubes():
      raise TubeIndexError(f"No tube {index} in a game of {self.getNumTubes()} tubes")
    palette = KNOWN_COLOURS if self.strictColours else None
    tube = Tube.FromText(description, index, self.tubeSize, palette)
    self.tubes[index] = tube
    self.colours = self.colours | set(colour for colour in tube.cells if not colour.isEmpty())

  def getNumTubes(self) -> int:
    return len(self.tubes)

  def isSetupValid(self) -> bool:
    if self.getNumTubes() - NUM_BUFFER_TUBES != len(self.colours):
      return False
    counts, _errors = self.analyzeColours()
    return all(counts[colour] == self.tubeSize for colour in self.colours)

  def analyzeColours(self) -> tuple[dict[Colour, int], list[str]]: # (dict[colour, occurrences], list[error strings])
    counts = defaultdict(int)
    for colour in self.colours:
      counts[colour] += 0
    for tube, space in itertools.product(self.tubes, range(self.tubeSize)):
      colour = tube.cells[space]
      if not colour.isEmpty():
        counts[colour] += 1

    errors = list()
    expectedColours = self.getNumTubes() - NUM_BUFFER_TUBES
    if expectedColours != len(self.colours):
      errors.append(f"Expected {expectedColours} colours for {self.getNumTubes()} tubes, found {len(self.colours)}!")
    for colour, count in sorted(counts.items(), key=lambda item: item[0].label):
      if count > self.tubeSize:
        errors.append(f"Colour '{colour}' appears too many times ({count})!")
      elif count < self.tubeSize:
        errors.append(f"Colour '{colour}' appears too few times ({count})!")

    return (counts, errors)

  def isMoveLegal(self, move: Move) -> bool:
    numTubes = self.getNumTubes()
    if move.startTube == move.endTube:
      return False # Can't pour into the same tube
    if not (0 <= move.startTube < numTubes and 0 <= move.endTube < numTubes):
      return False
    return self.tubes[move.startTube].canPourFrom(move) and self.tubes[move.endTube].canPourInto(move)

  def applyMove(self, move: Move) -> None:
    if not self.isMoveLegal(move):
      logger.debug("Ignoring illegal move %s", move)
      return
    self.tubes[move.startTube].applyPourFrom(move)
    self.tubes[move.endTube].applyPourInto(move)
    self.currentMove += 1
    self.lastMove = MoveRecord(self.currentMove, move, self.lastMove)

  def isSolved(self) -> bool:
    return all(tube.isUniform() for tube in self.tubes)

  def blockCount(self) -> int:
    return sum(tube.blockCount() for tube in self.tubes)

  def getMoveList(self, after: int = 0) -> list[Move]:
    """Moves in the order they were applied, skipping the first `after` of them."""
    moves = list()
    record = self.lastMove
    while record is not None and record.number > after:
      moves.append(record.move)
      record = record.prev
    moves.reverse()
    return moves
  @property
  def moves(self) -> dict[int, Move]:
    """Move number (from 1) to the move applied at that step."""
    return {number: move for number, move in enumerate(self.getMoveList(), start=1)}

  def clone(self) -> "Game":
    newGame = Game(tubeSize=self.tubeSize, strictColours=self.strictColours)
    newGame.tubes = [tube.clone() for tube in self.tubes]
    newGame.lastMove = self.lastMove
    newGame.currentMove = self.currentMove
    newGame.colours = self.colours
    return newGame
  def spawn(self, move: Move) -> "Game":
    newGame = self.clone()
    newGame.applyMove(move)
    return newGame

  def stateKey(self) -> tuple[tuple[str, ...], ...]:
    return tuple(tube.key() for tube in self.tubes)
  def canonicalKey(self) -> tuple[tuple[str, ...], ...]:
    """Like `stateKey`, but the same for any ordering of the tubes."""
    return tuple(sorted(tube.key() for tube in self.tubes))

  def moveLogAsText(self) -> str:
    return "\n".join(f"{number} : ({self.moves[number]})" for number in sorted(self.moves))
  def printMoves(self) -> None:
    NEW_LINE = "\n  "
    lines = self.moveLogAsText().splitlines() or ["None"]
    print(f"Moves ({self.currentMove}):" + NEW_LINE + NEW_LINE.join(lines))

  def formatTubes(self) -> str:
    lines = [list() for _ in range(self.tubeSize + 1)]
    width = max([len(colour.label) for colour in self.colours] + [1]) + 1

    for i in range(self.getNumTubes()):
      lines[0].append(Style.BRIGHT + str(i + 1).ljust(width) + Style.NORMAL)

    for spaceIndex in range(self.tubeSize):
      for tube in self.tubes:
        lines[spaceIndex + 1].append(tube.format(spaceIndex, ljust=width))

    return "\n".join(["  ".join(line) for line in lines])
  def printTubes(self) -> None:
    print(self.formatTubes())

  def printColours(self, analyzedData = None) -> None:
    lines = []
    counts, errors = analyzedData if analyzedData else self.analyzeColours()

    lines.append("Frequency of colours:")
    for colour, count in sorted(counts.items(), key=lambda item: item[0].label):
      label = "\t"
      if count != self.tubeSize:
        label += "(too many)" if count > self.tubeSize else "(too few)"
      lines.append(f"  {colour}: \t{count}" + label)

    if len(errors):
      lines.append("\nErrors:")
      for error in errors:
        lines.append("  " + error)

    print("\n".join(lines))

  def __str__(self) -> str:
    return "\n".join(str(tube) for tube in self.tubes)
  def __eq__(self, other: object) -> bool:
    if isinstance(other, Game):
      return self.stateKey() == other.stateKey()
    return False
  def __hash__(self) -> int:
    return hash(self.stateKey())
