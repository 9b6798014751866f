from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    key: str
    suit: int
    value: int
    color: str
    face_up: bool


@dataclass(frozen=True)
class StackView:
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class GameViewModel:
    stock_count: int
    waste: StackView
    foundations: tuple[StackView, ...]
    tableau: tuple[StackView, ...]
    moves: int
    elapsed: float
    game_ended: bool
    can_undo: bool


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
