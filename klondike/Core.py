import logging
import random
from dataclasses import dataclass
from typing import Optional

from klondike.Card import (
    ACE,
    DECK_SIZE,
    FOUNDATION,
    FOUNDATION_COUNT,
    KING,
    STOCK,
    TABLEAU,
    TABLEAU_COUNT,
    WASTE,
    createDeck,
    deal,
    decodeStack,
    encodeStack,
    lastOf,
    shuffle,
)
from solver.hint import DRAW, HintResult, best_move_for_card, find_hint, next_foundation_move

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


class GameConfig:
    def __init__(self):
        self.seed = None
        self.historyLimit = HISTORY_LIMIT
        # When False the caller paces the cascade through Core.autoCompleteStep().
        self.autoComplete = True
        # Called with the seed; the result only needs randrange(n).
        self.rngFactory = random.Random

    def initDeck(self, rng=None):
        if rng is None:
            rng = self.rngFactory(self.seed)
        return shuffle(createDeck(), rng)


@dataclass(frozen=True)
class CardLocation:
    kind: str
    pileIndex: Optional[int]
    cardIndex: int


@dataclass(frozen=True)
class GameStats:
    elapsedTime: float
    moveCount: int


@dataclass
class Snapshot:
    stock: list
    waste: list
    foundations: list
    tableau: list
    moves: int


class GameEvent:
    feedback = "light"


class CardMove(GameEvent):
    def __init__(self, cards, src: CardLocation, targetKind: str, targetIndex: int, revealed: bool):
        self.cards = cards
        self.src = src
        self.targetKind = targetKind
        self.targetIndex = targetIndex
        self.revealed = revealed

    @property
    def feedback(self):
        if self.targetKind == FOUNDATION:
            return "medium"
        return "light"


class StockDraw(GameEvent):
    def __init__(self, card):
        self.card = card


class WasteRecycle(GameEvent):
    feedback = "medium"

    def __init__(self, count: int):
        self.count = count


def copyPile(pile):
    return [card.copy() for card in pile]


class HistoryRecorder:
    def __init__(self, limit=HISTORY_LIMIT):
        self.limit = limit
        self.lst = []

    def __len__(self):
        return len(self.lst)

    def log(self, snapshot: Snapshot):
        self.lst.append(snapshot)
        if len(self.lst) > self.limit:
            del self.lst[0]

    def pop(self) -> Optional[Snapshot]:
        if len(self.lst) == 0:
            return None
        return self.lst.pop()


class Core:
    """
    One Klondike session.

    Player operations (moveCard, drawFromStock, undo, ...) validate everything
    first and return False without touching the board when the action is
    illegal. A successful operation snapshots the board before mutating it.
    """

    def __init__(self):
        self.interface = None
        self.config = GameConfig()

        self.stock = []
        self.waste = []
        self.foundations = [[] for _ in range(FOUNDATION_COUNT)]
        self.tableau = [[] for _ in range(TABLEAU_COUNT)]

        self.moves = 0
        self.elapsed = 0
        self.timerRunning = False
        self.gameEnded = False

        self.history = HistoryRecorder()
        self.autoCompleting = False

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def newGame(self, gameConfig: GameConfig = None, rng=None):
        if gameConfig is not None:
            self.config = gameConfig
        self.tableau, self.stock = deal(self.config.initDeck(rng))
        self.waste = []
        self.foundations = [[] for _ in range(FOUNDATION_COUNT)]
        self.__reset()
        logger.info("new game dealt (seed=%s)", self.config.seed)
        if self.interface is not None:
            self.interface.onStart()

    def loadPosition(self, stock=(), waste=(), foundations=(), tableau=(), moves=0):
        """
        Installs an arbitrary position and clears the history.

        Piles are card lists or encodeStack() strings; missing foundations and
        tableau piles are empty.
        """

        def toPile(pile):
            if isinstance(pile, str):
                return decodeStack(pile)
            return list(pile)

        if len(foundations) > FOUNDATION_COUNT or len(tableau) > TABLEAU_COUNT:
            raise ValueError("too many foundation or tableau piles")
        newStock = toPile(stock)
        newWaste = toPile(waste)
        newFoundations = [toPile(p) for p in foundations]
        newFoundations += [[] for _ in range(FOUNDATION_COUNT - len(newFoundations))]
        newTableau = [toPile(p) for p in tableau]
        newTableau += [[] for _ in range(TABLEAU_COUNT - len(newTableau))]

        ids = sorted(card.id for pile in [newStock, newWaste, *newFoundations, *newTableau] for card in pile)
        if ids != list(range(DECK_SIZE)):
            raise ValueError("a position must hold each of the 52 cards exactly once")

        self.stock = newStock
        self.waste = newWaste
        self.foundations = newFoundations
        self.tableau = newTableau
        self.__reset()
        self.moves = moves
        self.gameEnded = self.foundationCount() == DECK_SIZE

    def __reset(self):
        self.moves = 0
        self.elapsed = 0
        self.timerRunning = False
        self.gameEnded = False
        self.history = HistoryRecorder(self.config.historyLimit)
        self.autoCompleting = False

    # ---------- read-only helpers ----------

    def getPile(self, kind: str, index: Optional[int] = None):
        if kind == STOCK:
            return self.stock
        if kind == WASTE:
            return self.waste
        if kind == FOUNDATION and index is not None and 0 <= index < FOUNDATION_COUNT:
            return self.foundations[index]
        if kind == TABLEAU and index is not None and 0 <= index < TABLEAU_COUNT:
            return self.tableau[index]
        return None

    def allCards(self):
        for pile in [self.stock, self.waste, *self.foundations, *self.tableau]:
            yield from pile

    def foundationCount(self):
        return sum(len(f) for f in self.foundations)

    def stats(self) -> GameStats:
        return GameStats(elapsedTime=self.elapsed, moveCount=self.moves)

    def stateLines(self):
        lines = [encodeStack(self.stock), encodeStack(self.waste)]
        lines.extend(encodeStack(f) for f in self.foundations)
        lines.extend(encodeStack(t) for t in self.tableau)
        return lines

    def canUndo(self):
        return len(self.history) > 0

    # ---------- location & legality ----------

    def findCardLocation(self, card) -> Optional[CardLocation]:
        idx = indexOf(self.waste, card)
        if idx != -1:
            return CardLocation(WASTE, None, idx)
        for i, foundation in enumerate(self.foundations):
            idx = indexOf(foundation, card)
            if idx != -1:
                return CardLocation(FOUNDATION, i, idx)
        for i, pile in enumerate(self.tableau):
            idx = indexOf(pile, card)
            if idx != -1:
                return CardLocation(TABLEAU, i, idx)
        return None

    def canMoveToFoundation(self, card, foundationIndex: int) -> bool:
        if foundationIndex < 0 or foundationIndex >= FOUNDATION_COUNT:
            return False
        foundation = self.foundations[foundationIndex]
        if len(foundation) == 0:
            return card.value == ACE
        top = lastOf(foundation)
        return card.suit == top.suit and card.value == top.value + 1

    def canMoveToTableau(self, card, tableauIndex: int) -> bool:
        if tableauIndex < 0 or tableauIndex >= TABLEAU_COUNT:
            return False
        pile = self.tableau[tableauIndex]
        if len(pile) == 0:
            return card.value == KING
        top = lastOf(pile)
        if not top.faceUp:
            return False
        return card.color() != top.color() and card.value == top.value - 1

    def movableUnit(self, location: CardLocation):
        """
        The cards that move together when the card at ``location`` is picked up,
        or None when that card cannot be picked up.
        """
        pile = self.getPile(location.kind, location.pileIndex)
        if location.kind == TABLEAU:
            unit = pile[location.cardIndex:]
            if not all(card.faceUp for card in unit):
                return None
            return unit
        if location.cardIndex != len(pile) - 1:
            return None
        return [lastOf(pile)]

    def __canPlace(self, unit, src: CardLocation, targetKind: str, targetIndex: int):
        if targetKind == FOUNDATION:
            if len(unit) != 1:
                return False
            if src.kind == FOUNDATION and src.pileIndex == targetIndex:
                return False
            return self.canMoveToFoundation(unit[0], targetIndex)
        if targetKind == TABLEAU:
            if src.kind == TABLEAU and src.pileIndex == targetIndex:
                return False
            return self.canMoveToTableau(unit[0], targetIndex)
        return False

    # ---------- player operations ----------

    def moveCard(self, card, targetKind: str, targetIndex: int) -> bool:
        src = self.findCardLocation(card)
        if src is None:
            logger.debug("rejected move of %s: card is not in a movable pile", card.key)
            return False
        unit = self.movableUnit(src)
        if unit is None:
            logger.debug("rejected move of %s: card is not movable from %s", card.key, src.kind)
            return False
        if not self.__canPlace(unit, src, targetKind, targetIndex):
            logger.debug("rejected move of %s to %s %s", card.key, targetKind, targetIndex)
            return False

        self.saveState()
        srcPile = self.getPile(src.kind, src.pileIndex)
        del srcPile[src.cardIndex:]
        revealed = False
        if src.kind == TABLEAU and len(srcPile) > 0 and not lastOf(srcPile).faceUp:
            lastOf(srcPile).faceUp = True
            revealed = True
        self.getPile(targetKind, targetIndex).extend(unit)
        self.moves += 1
        self.__startClock()

        self.__emit(CardMove(unit, src, targetKind, targetIndex, revealed))
        if not self.checkWin():
            self.tryAutoComplete()
        return True

    def autoMoveToFoundation(self, card) -> bool:
        location = self.findCardLocation(card)
        if location is None:
            return False
        if location.kind == TABLEAU and location.cardIndex != len(self.tableau[location.pileIndex]) - 1:
            return False
        for i in range(FOUNDATION_COUNT):
            if self.canMoveToFoundation(card, i):
                return self.moveCard(card, FOUNDATION, i)
        return False

    def drawFromStock(self) -> bool:
        if len(self.stock) > 0:
            self.saveState()
            card = self.stock.pop()
            card.faceUp = True
            self.waste.append(card)
            self.moves += 1
            self.__startClock()
            self.__emit(StockDraw(card))
            return True
        if len(self.waste) > 0:
            # recycling is not counted as a move
            self.saveState()
            self.stock = self.waste[::-1]
            for card in self.stock:
                card.faceUp = False
            self.waste = []
            self.__startClock()
            self.__emit(WasteRecycle(len(self.stock)))
            return True
        return False

    def findBestMoveForCard(self, card) -> Optional[HintResult]:
        return best_move_for_card(self, card)

    def applyHint(self, hint: HintResult) -> bool:
        if hint.kind == DRAW:
            return self.drawFromStock()
        return self.moveCard(hint.card, hint.target_kind, hint.target_index)

    def saveState(self):
        self.history.log(
            Snapshot(
                stock=copyPile(self.stock),
                waste=copyPile(self.waste),
                foundations=[copyPile(f) for f in self.foundations],
                tableau=[copyPile(t) for t in self.tableau],
                moves=self.moves,
            )
        )

    def undo(self) -> bool:
        snapshot = self.history.pop()
        if snapshot is None:
            return False
        self.stock = snapshot.stock
        self.waste = snapshot.waste
        self.foundations = snapshot.foundations
        self.tableau = snapshot.tableau
        self.moves = snapshot.moves
        if self.gameEnded and self.foundationCount() != DECK_SIZE:
            self.gameEnded = False
            self.timerRunning = True
        self.__feedback("light")
        if self.interface is not None:
            self.interface.onUndo()
        return True

    def tick(self, seconds=1):
        if self.timerRunning:
            self.elapsed += seconds

    # ---------- hints, auto-complete & win ----------

    def findHint(self) -> Optional[HintResult]:
        hint = find_hint(self)
        if hint is None:
            logger.debug("hint: no move available")
            self.__feedback("heavy")
        elif hint.kind == DRAW:
            logger.debug("hint: draw from stock")
            self.__feedback("light")
        else:
            logger.debug("hint: %s (%s)", hint.to_notation(), hint.rule)
            self.__feedback("medium")
        return hint

    def canAutoComplete(self) -> bool:
        if self.gameEnded or len(self.stock) > 0:
            return False
        return all(card.faceUp for pile in self.tableau for card in pile)

    def autoCompleteStep(self) -> bool:
        if not self.canAutoComplete():
            return False
        hint = next_foundation_move(self)
        if hint is None:
            return False
        return self.moveCard(hint.card, hint.target_kind, hint.target_index)

    def tryAutoComplete(self) -> int:
        """
        Plays every forced foundation move once the board is fully face-up and
        the stock is empty. Returns the number of moves made.
        """
        if not self.config.autoComplete or self.autoCompleting or not self.canAutoComplete():
            return 0
        logger.info("auto-complete started with %d cards on foundations", self.foundationCount())
        self.autoCompleting = True
        count = 0
        try:
            while self.autoCompleteStep():
                count += 1
        finally:
            self.autoCompleting = False
        return count

    def checkWin(self) -> bool:
        if self.foundationCount() != DECK_SIZE:
            return False
        if not self.gameEnded:
            self.gameEnded = True
            self.timerRunning = False
            logger.info("game won in %d moves, %s seconds", self.moves, self.elapsed)
            self.__feedback("success")
            self.__notifyWin()
        return True

    # ---------- collaborators ----------

    def __startClock(self):
        if not self.gameEnded:
            self.timerRunning = True

    def __emit(self, event: GameEvent):
        if self.interface is not None:
            self.interface.onEvent(event)
        self.__feedback(event.feedback)

    def __feedback(self, style: str):
        if self.interface is None:
            return
        try:
            self.interface.onFeedback(style)
        except Exception:
            # Never break gameplay for feedback failures.
            logger.exception("feedback channel failed on %r", style)

    def __notifyWin(self):
        if self.interface is None:
            return
        try:
            self.interface.onWin(self.stats())
        except Exception:
            logger.exception("statistics collaborator failed on win")


def indexOf(pile, card):
    for i, c in enumerate(pile):
        if c.id == card.id:
            return i
    return -1
