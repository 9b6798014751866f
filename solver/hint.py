"""
Hint search: an ordered chain of independent strategies.

Each strategy inspects the board and returns either a ``HintResult`` or
``None``; ``find_hint`` returns the first match, so the order of
``STRATEGIES`` is the priority order of the suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from klondike.Card import FOUNDATION, FOUNDATION_COUNT, KING, TABLEAU, TABLEAU_COUNT, Card

MOVE = "move"
DRAW = "draw"


@dataclass(frozen=True, slots=True)
class HintResult:
    """A suggested action: move ``card`` (and the cards above it) or draw."""

    kind: str
    card: Optional[Card] = None
    target_kind: Optional[str] = None
    target_index: int = -1
    rule: str = ""

    def to_notation(self) -> str:
        if self.kind == DRAW:
            return "DRAW"
        return f"MOVE({self.card.key}->{self.target_kind[0].upper()}{self.target_index})"


Strategy = Callable[[object], Optional[HintResult]]


def _first_foundation_for(core, card: Card) -> int:
    for i in range(FOUNDATION_COUNT):
        if core.canMoveToFoundation(card, i):
            return i
    return -1


def waste_to_foundation(core) -> Optional[HintResult]:
    if not core.waste:
        return None
    card = core.waste[-1]
    dest = _first_foundation_for(core, card)
    if dest < 0:
        return None
    return HintResult(MOVE, card, FOUNDATION, dest, "waste_to_foundation")


def tableau_to_foundation(core) -> Optional[HintResult]:
    for pile in core.tableau:
        if not pile:
            continue
        card = pile[-1]
        dest = _first_foundation_for(core, card)
        if dest >= 0:
            return HintResult(MOVE, card, FOUNDATION, dest, "tableau_to_foundation")
    return None


def tableau_to_tableau(core) -> Optional[HintResult]:
    # First match in (pile, card, target) scan order; a move qualifies when it
    # uncovers a face-down card or lands on a non-empty pile.
    for src, pile in enumerate(core.tableau):
        for card_idx, card in enumerate(pile):
            if not card.faceUp:
                continue
            reveals = card_idx > 0 and not pile[card_idx - 1].faceUp
            for dest in range(TABLEAU_COUNT):
                if dest == src or not core.canMoveToTableau(card, dest):
                    continue
                if reveals or core.tableau[dest]:
                    return HintResult(MOVE, card, TABLEAU, dest, "tableau_to_tableau")
    return None


def waste_to_tableau(core) -> Optional[HintResult]:
    if not core.waste:
        return None
    card = core.waste[-1]
    for dest in range(TABLEAU_COUNT):
        if core.canMoveToTableau(card, dest):
            return HintResult(MOVE, card, TABLEAU, dest, "waste_to_tableau")
    return None


def king_to_empty(core) -> Optional[HintResult]:
    for src, pile in enumerate(core.tableau):
        # index 0 is skipped: a King already at the bottom gains nothing
        for card_idx in range(1, len(pile)):
            card = pile[card_idx]
            if not card.faceUp or card.value != KING:
                continue
            for dest in range(TABLEAU_COUNT):
                if dest != src and not core.tableau[dest]:
                    return HintResult(MOVE, card, TABLEAU, dest, "king_to_empty")
    return None


def draw_from_stock(core) -> Optional[HintResult]:
    if core.stock or core.waste:
        return HintResult(DRAW, rule="draw_from_stock")
    return None


STRATEGIES: tuple[Strategy, ...] = (
    waste_to_foundation,
    tableau_to_foundation,
    tableau_to_tableau,
    waste_to_tableau,
    king_to_empty,
    draw_from_stock,
)

FOUNDATION_STRATEGIES: tuple[Strategy, ...] = (waste_to_foundation, tableau_to_foundation)


def find_hint(core, strategies: tuple[Strategy, ...] = STRATEGIES) -> Optional[HintResult]:
    for strategy in strategies:
        hint = strategy(core)
        if hint is not None:
            return hint
    return None


def next_foundation_move(core) -> Optional[HintResult]:
    """The next move of the auto-complete cascade, if any."""
    return find_hint(core, FOUNDATION_STRATEGIES)


def best_move_for_card(core, card: Card) -> Optional[HintResult]:
    """
    Target for a single tap on ``card``: a foundation when the card is a lone
    top card, then a non-empty tableau pile, then an empty pile for a King.
    """
    location = core.findCardLocation(card)
    if location is None:
        return None
    pile = core.getPile(location.kind, location.pileIndex)
    source = pile[location.cardIndex]
    if location.kind == TABLEAU:
        if not source.faceUp:
            return None
    elif location.cardIndex != len(pile) - 1:
        return None
    is_top = location.cardIndex == len(pile) - 1

    if is_top:
        for i in range(FOUNDATION_COUNT):
            if location.kind == FOUNDATION and location.pileIndex == i:
                continue
            if core.canMoveToFoundation(source, i):
                return HintResult(MOVE, source, FOUNDATION, i, "tap_to_foundation")

    from_tableau = location.kind == TABLEAU
    for dest in range(TABLEAU_COUNT):
        if from_tableau and location.pileIndex == dest:
            continue
        if core.tableau[dest] and core.canMoveToTableau(source, dest):
            return HintResult(MOVE, source, TABLEAU, dest, "tap_to_tableau")

    if source.value == KING:
        for dest in range(TABLEAU_COUNT):
            if from_tableau and location.pileIndex == dest:
                continue
            if not core.tableau[dest]:
                return HintResult(MOVE, source, TABLEAU, dest, "tap_king_to_empty")
    return None
