from klondike.Card import DECK_SIZE, Card
from klondike.Interface import Interface


class IdentityRandom:
    """Shuffle source that leaves the deck in createDeck() order."""

    def randrange(self, n):
        return n - 1


class SwapRandom(IdentityRandom):
    """
    Seeded shuffle source that keeps createDeck() order except for the
    Fisher-Yates steps listed in ``swaps`` (step index -> swap partner).
    """

    def __init__(self, seed, swaps):
        self.seed = seed
        self.swaps = swaps

    def randrange(self, n):
        return self.swaps.get(n - 1, n - 1)


class RecordingInterface(Interface):
    def __init__(self):
        super().__init__()
        self.events = []
        self.feedback = []
        self.wins = []
        self.undos = 0
        self.started = False

    def onStart(self):
        self.started = True

    def onEvent(self, event):
        self.events.append(event)
        super().onEvent(event)

    def onUndo(self):
        self.undos += 1
        super().onUndo()

    def onFeedback(self, style):
        self.feedback.append(style)

    def onWin(self, stats):
        self.wins.append(stats)


def up(key):
    return Card.parse(key, faceUp=True)


def down(key):
    return Card.parse(key, faceUp=False)


def run(suit, top):
    return [up(rank + suit) for rank in Card.RANKS[:top]]


def load(core, waste=(), foundations=(), tableau=(), stock=None, moves=0):
    """Loads a position; cards not placed anywhere else go to the stock."""
    if stock is None:
        placed = {c.id for pile in [waste, *foundations, *tableau] for c in pile}
        stock = [Card(i) for i in range(DECK_SIZE) if i not in placed]
    core.loadPosition(stock=stock, waste=waste, foundations=foundations, tableau=tableau, moves=moves)


def state(core):
    return core.stateLines() + [str(core.moves)]
