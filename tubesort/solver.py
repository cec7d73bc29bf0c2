from collections import deque
from enum import Enum, auto
import logging
from time import time
from typing import TypedDict

from tubesort.constant import MAX_SEARCH_ITERATIONS, NUM_BUFFER_TUBES, REPORT_ITERATION_FREQ, SOLVE_METHOD
from tubesort.game import Game, Move
from tubesort.helper import fPercent, fRate, getTimeRunning

logger = logging.getLogger(__name__)


class SolveMethod(Enum):
  BUCKET = auto() # Best first, by how far the block count still has to fall
  BFS = auto()    # Breadth First Search (fewest moves)
  DFS = auto()    # Depth First Search

  @classmethod
  def Interpret(cls, name: str) -> "SolveMethod":
    """Raises KeyError for names that aren't a method"""
    return SolveMethod[name.strip().upper()]

  @classmethod
  def getKeys(cls) -> list[str]:
    return list(cls.__members__.keys())

class SolveStats(TypedDict):
  startTime: float
  endTime: float
  solveMethod: SolveMethod
  solved: bool
  abandoned: bool               # Stopped by the iteration bound rather than running out of states

  numIterations: int
  numDeadEnds: int
  numDuplicateGames: int
  numPartialSolutionsGenerated: int
  maxFrontierLength: int
  numStatesComputed: int
  solutionLength: int | None


class Solver:
  """Searches the states reachable from a game for a sequence of moves that sorts it.

  States are filed into buckets by how many blocks they have shed since the start.
  Bucket 0 holds the starting state, and later buckets are closer to solved, so the
  search always continues from the state that has made the most progress.
  """
  game: Game                # Snapshot taken at construction. Never mutated
  initialBlockCount: int
  targetBlockCount: int     # One block per colour, with the buffer tubes empty
  buckets: list[list[Game]]
  solveMethod: SolveMethod
  maxIterations: int | None
  solveStats: SolveStats

  def __init__(self, game: Game, solveMethod: SolveMethod | str = SOLVE_METHOD, maxIterations: int | None = MAX_SEARCH_ITERATIONS) -> None:
    self.game = game.clone()
    self.initialBlockCount = self.game.blockCount()
    self.targetBlockCount = self.game.getNumTubes() - NUM_BUFFER_TUBES
    if isinstance(solveMethod, str):
      solveMethod = SolveMethod.Interpret(solveMethod)
    self.solveMethod = solveMethod
    self.maxIterations = maxIterations
    self.solveStats = None
    self._allocateBuckets()

  def _allocateBuckets(self) -> None:
    self.buckets = []
    if self.initialBlockCount == self.targetBlockCount:
      return # Already as few blocks as a sorted game has
    numBuckets = max(self.initialBlockCount - self.targetBlockCount, 1)
    self.buckets = [list() for _ in range(numBuckets)]
    self.buckets[0].append(self.game)

  def _bucketIndex(self, state: Game) -> int:
    index = self.initialBlockCount - state.blockCount()
    return min(max(index, 0), len(self.buckets) - 1)

  def enumerateLegalMoves(self, state: Game = None) -> list[Move]:
    state = state or self.game
    moves = list()
    for start, startTube in enumerate(state.tubes):
      startTop = startTube.topSegment()
      if not startTop:
        continue # Nothing to pour
      for end, endTube in enumerate(state.tubes):
        if start == end:
          continue
        endTop = endTube.topSegment()
        if not endTop:
          if startTop.position == startTube.size - startTop.blockSize:
            continue # Moving the only colour in a tube to another empty tube changes nothing
          moves.append(Move(start, end, startTop.colour, startTop.blockSize))
        elif endTop.colour == startTop.colour:
          quantity = min(startTop.blockSize, endTube.headroom())
          if quantity > 0:
            moves.append(Move(start, end, startTop.colour, quantity))
    return moves

  def peekMove(self, state: Game, move: Move) -> Game:
    """A copy of `state` with `move` applied when it's legal. `state` itself is untouched."""
    peekGame = state.clone()
    if state.isMoveLegal(move):
      peekGame.applyMove(move)
    return peekGame

  def wouldReduceBlockCount(self, state: Game, move: Move) -> bool:
    return self._reducesBlockCount(state, self.peekMove(state, move))
  def _reducesBlockCount(self, state: Game, nextGame: Game) -> bool:
    return nextGame.blockCount() < state.blockCount()

  def progressingMoves(self, state: Game = None) -> list[Move]:
    state = state or self.game
    return [move for move in self.enumerateLegalMoves(state) if self.wouldReduceBlockCount(state, move)]

  def getStats(self) -> SolveStats:
    return self.solveStats

  def solve(self) -> list[Move] | None:
    """The moves that sort the game (empty if it already is), or None when no solution was found."""
    sv = self.solveStats = SolveStats(
      startTime = time(),
      endTime = None,
      solveMethod = self.solveMethod,
      solved = False,
      abandoned = False,

      numIterations = 0,
      numDeadEnds = 0,
      numDuplicateGames = 0,
      numPartialSolutionsGenerated = 0,
      maxFrontierLength = 1, # The starting state
      numStatesComputed = 1,
      solutionLength = None,
    )

    solution: Game | None = None
    if self.game.isSolved():
      solution = self.game
    elif self.solveMethod == SolveMethod.BUCKET:
      solution = self._searchBuckets()
    else:
      solution = self._searchQueue()

    sv["endTime"] = time()
    if solution is None:
      logger.info("No solution found after %d iterations", sv["numIterations"])
      return None

    moves = solution.getMoveList(after=self.game.currentMove)
    sv["solved"] = True
    sv["solutionLength"] = len(moves)
    logger.info("Found a solution of %d moves after %d iterations", len(moves), sv["numIterations"])
    return moves

  def _searchBuckets(self) -> Game | None:
    self._allocateBuckets()
    if not self.buckets:
      return None # Nothing left to reduce, yet not sorted
    computed = set([self.game.canonicalKey()])

    while True:
      index = self._nextBucketIndex()
      if index is None:
        break
      current = self.buckets[index][-1]
      if not self._onNextIteration(current):
        break # Leaves the frontier as it was
      self.buckets[index].pop()

      solution = self._expand(current, computed, lambda nextGame: self.buckets[self._bucketIndex(nextGame)].append(nextGame))
      if solution is not None:
        return solution
      self._trackFrontier(sum(len(bucket) for bucket in self.buckets))

    return None

  def _nextBucketIndex(self) -> int | None:
    for index in range(len(self.buckets) - 1, -1, -1):
      if self.buckets[index]:
        return index
    return None

  def _searchQueue(self) -> Game | None:
    q: deque[Game] = deque([self.game])
    computed = set([self.game.canonicalKey()])
    searchBFS = self.solveMethod == SolveMethod.BFS

    while q:
      # Taking from the front or the back makes all the difference between BFS and DFS
      current = q[0] if searchBFS else q[-1]
      if not self._onNextIteration(current):
        break
      if searchBFS:
        q.popleft()
      else:
        q.pop()

      solution = self._expand(current, computed, q.append)
      if solution is not None:
        return solution
      self._trackFrontier(len(q))

    return None

  def _expand(self, current: Game, computed: set, enqueue) -> Game | None:
    """Queues every unseen state one move away from `current`, or returns the first sorted one.

    Progressing states are queued last, so the stack based searches take them first.
    """
    sv = self.solveStats
    progressing, shuffles = list(), list()
    for move in self.enumerateLegalMoves(current):
      nextGame = self.peekMove(current, move)
      sv["numPartialSolutionsGenerated"] += 1

      key = nextGame.canonicalKey()
      if key in computed:
        sv["numDuplicateGames"] += 1
        continue
      computed.add(key)
      sv["numStatesComputed"] += 1

      if nextGame.isSolved():
        return nextGame
      if self._reducesBlockCount(current, nextGame):
        progressing.append(nextGame)
      else:
        shuffles.append(nextGame)

    for nextGame in shuffles + progressing:
      enqueue(nextGame)
    if not progressing and not shuffles:
      sv["numDeadEnds"] += 1
    return None

  def _onNextIteration(self, current: Game) -> bool:
    """Counts an expansion. Returns False once the iteration bound is exceeded."""
    sv = self.solveStats
    sv["numIterations"] += 1
    if self.maxIterations is not None and sv["numIterations"] > self.maxIterations:
      sv["numIterations"] -= 1
      sv["abandoned"] = True
      logger.warning("Abandoning search after %d iterations", self.maxIterations)
      return False

    if sv["numIterations"] % REPORT_ITERATION_FREQ == 0:
      logger.info("Checked %d iterations. Current: %d moves, %d blocks", sv["numIterations"], current.currentMove, current.blockCount())
    return True

  def _trackFrontier(self, frontierLength: int) -> None:
    sv = self.solveStats
    sv["maxFrontierLength"] = max(sv["maxFrontierLength"], frontierLength)

  def printSolveStats(self) -> None:
    sv = self.getStats()
    if not sv:
      print("No search has been run.")
      return
    secsSearching, minsSearching = getTimeRunning(sv["startTime"], sv["endTime"])
    solutionLength = sv["solutionLength"] if sv["solutionLength"] is not None else "--"

    print(f"""
          Finished search algorithm:
            {sv['solveMethod'].name           }\t   Solving method
            {solutionLength                   }\t   Solution moves
            {secsSearching                    }\t   Seconds searching
            {minsSearching                    }\t   Minutes searching
            {sv['numIterations']              }\t   Num iterations
            {fRate(sv['numIterations'], sv['endTime'] - sv['startTime'])}\t   Iteration rate
            {sv['maxFrontierLength']          }\t   Max frontier length
            {sv['numDeadEnds']                }\t   Num dead ends
            {sv['numPartialSolutionsGenerated']}\t   Partial solutions generated
            {sv['numDuplicateGames']          }\t   Num duplicate games
            {fPercent(sv['numDuplicateGames'], sv['numPartialSolutionsGenerated'])}\t   Percent duplicate games
            {sv['numStatesComputed']          }\t   Num states computed
            {'yes' if sv['abandoned'] else 'no'}\t   Abandoned
          """)
