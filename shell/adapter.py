from klondike.Card import FOUNDATION
from klondike.Core import CardMove, Core, GameEvent, StockDraw, WasteRecycle
from shell.ui_config import HINT_PULSE_SEC
from shell.view_model import AnimationEvent, CardView, GameViewModel, StackView
from solver.hint import DRAW, HintResult


class CoreAdapter:
    """Bridges the Core state/events to a renderer-friendly model."""

    @staticmethod
    def card_view(card) -> CardView:
        return CardView(key=card.key, suit=card.suit, value=card.value, color=card.color(), face_up=card.faceUp)

    @staticmethod
    def stack_view(pile) -> StackView:
        return StackView(cards=tuple(CoreAdapter.card_view(card) for card in pile))

    @staticmethod
    def snapshot(core: Core) -> GameViewModel:
        return GameViewModel(
            stock_count=len(core.stock),
            waste=CoreAdapter.stack_view(core.waste),
            foundations=tuple(CoreAdapter.stack_view(f) for f in core.foundations),
            tableau=tuple(CoreAdapter.stack_view(t) for t in core.tableau),
            moves=core.moves,
            elapsed=core.elapsed,
            game_ended=core.gameEnded,
            can_undo=core.canUndo(),
        )

    @staticmethod
    def event_to_animation(event: GameEvent) -> AnimationEvent:
        if isinstance(event, CardMove):
            return AnimationEvent(
                type="MOVE",
                payload={
                    "cards": [card.key for card in event.cards],
                    "src": (event.src.kind, event.src.pileIndex),
                    "dest": (event.targetKind, event.targetIndex),
                    "revealed": event.revealed,
                },
            )
        if isinstance(event, StockDraw):
            return AnimationEvent(type="DRAW", payload={"card": event.card.key})
        if isinstance(event, WasteRecycle):
            return AnimationEvent(type="RECYCLE", payload={"count": event.count})
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})

    @staticmethod
    def hint_to_highlight(core: Core, hint: HintResult) -> AnimationEvent:
        """
        Which elements to pulse for a hint: the stock for a draw, otherwise the
        source card and either the target pile's top card or the empty pile.
        """
        if hint.kind == DRAW:
            return AnimationEvent(type="HINT_STOCK", payload={"duration": HINT_PULSE_SEC})
        target = core.getPile(hint.target_kind, hint.target_index)
        target_card = None
        if hint.target_kind != FOUNDATION and target:
            target_card = target[-1].key
        return AnimationEvent(
            type="HINT",
            payload={
                "card": hint.card.key,
                "target": (hint.target_kind, hint.target_index),
                "target_card": target_card,
                "duration": HINT_PULSE_SEC,
            },
        )

    @staticmethod
    def clock_text(seconds) -> str:
        seconds = int(seconds)
        return f"{seconds // 60}:{seconds % 60:02d}"
