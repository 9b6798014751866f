import random

STOCK = "stock"
WASTE = "waste"
FOUNDATION = "foundation"
TABLEAU = "tableau"

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7
DECK_SIZE = 52

ACE = 1
KING = 13


def lastOf(lst):
    return lst[len(lst) - 1]


class Card:
    NUM_PER_SUIT = 13
    SUITS = "SHDC"
    SUIT_SYMBOLS = "♠♥♦♣"
    SUIT_NAMES = ("spade", "heart", "diamond", "club")
    RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

    def __init__(self, id, faceUp=False):
        self.id = id
        self.suit = id // Card.NUM_PER_SUIT
        self.value = id % Card.NUM_PER_SUIT + 1
        self.faceUp = faceUp

    @property
    def rank(self):
        return Card.RANKS[self.value - 1]

    @property
    def key(self):
        return self.rank + Card.SUITS[self.suit]

    def __str__(self):
        if self.faceUp:
            return self.key
        return self.key + "*"

    def __repr__(self):
        return self.__str__()

    def gameStr(self):
        if not self.faceUp:
            return "---"
        return self.rank + Card.SUIT_SYMBOLS[self.suit]

    def color(self):
        if self.suit in (1, 2):
            return "red"
        return "black"

    def copy(self):
        return Card(self.id, self.faceUp)

    @staticmethod
    def fromSuitAndValue(suit, value, faceUp=False):
        return Card(suit * Card.NUM_PER_SUIT + value - 1, faceUp)

    @staticmethod
    def parse(key: str, faceUp=True):
        """
        Builds a card from its key, e.g. ``"10H"``, ``"as"`` or ``"TC"``.
        """
        text = key.strip().upper()
        if len(text) < 2:
            raise ValueError(f"invalid card key: {key!r}")
        rankText, suitText = text[:-1], text[-1]
        if rankText == "T":
            rankText = "10"
        if rankText not in Card.RANKS or suitText not in Card.SUITS:
            raise ValueError(f"invalid card key: {key!r}")
        return Card.fromSuitAndValue(Card.SUITS.index(suitText), Card.RANKS.index(rankText) + 1, faceUp)


def createDeck():
    return [Card(i) for i in range(DECK_SIZE)]


def shuffle(deck, rng=random):
    # Fisher-Yates
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def deal(deck):
    """
    Deals the triangular tableau from the end of ``deck``.

    :param deck: shuffled cards, consumed in place
    :return: (tableau, stock); the leftover deck becomes the stock
    """
    tableau = [[] for _ in range(TABLEAU_COUNT)]
    for col in range(TABLEAU_COUNT):
        for row in range(col, TABLEAU_COUNT):
            card = deck.pop()
            card.faceUp = row == col
            tableau[row].append(card)
    for card in deck:
        card.faceUp = False
    return tableau, deck


def decodeStack(code: str):
    if code.startswith("empty"):
        return []
    cards = code.split(",")

    def decodeCard(s: str):
        data = s.split()
        return Card.parse(data[0], faceUp=len(data) > 1 and data[1] == "1")

    return list(map(decodeCard, cards))


def encodeStack(pile: list):
    if len(pile) == 0:
        return "empty"

    def encodeCard(card: Card):
        if card.faceUp:
            return card.key + " 1"
        return card.key + " 0"

    return ",".join(map(encodeCard, pile))
