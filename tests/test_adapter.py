import unittest

from klondike.Card import FOUNDATION, TABLEAU
from klondike.Core import Core, GameConfig, GameEvent
from shell.adapter import CoreAdapter
from shell.ui_config import HINT_PULSE_SEC
from solver.hint import DRAW, MOVE, HintResult
from tests.support import IdentityRandom, RecordingInterface, up


class CoreAdapterTestCase(unittest.TestCase):
    def setUp(self):
        self.core = Core()
        self.ui = RecordingInterface()
        self.core.registerInterface(self.ui)
        self.core.newGame(GameConfig(), rng=IdentityRandom())

    def test_snapshot_of_fresh_deal(self):
        vm = CoreAdapter.snapshot(self.core)
        self.assertEqual(24, vm.stock_count)
        self.assertEqual((), vm.waste.cards)
        self.assertEqual(4, len(vm.foundations))
        self.assertEqual([i + 1 for i in range(7)], [len(pile.cards) for pile in vm.tableau])
        self.assertEqual("KC", vm.tableau[0].cards[0].key)
        self.assertEqual("black", vm.tableau[0].cards[0].color)
        self.assertFalse(vm.tableau[6].cards[0].face_up)
        self.assertFalse(vm.can_undo)
        self.assertFalse(vm.game_ended)

    def test_event_mapping(self):
        self.core.drawFromStock()
        self.core.moveCard(up("AD"), FOUNDATION, 0)
        for _ in range(23):
            self.core.drawFromStock()
        self.core.drawFromStock()

        draw_evt = CoreAdapter.event_to_animation(self.ui.events[0])
        move_evt = CoreAdapter.event_to_animation(self.ui.events[1])
        recycle_evt = CoreAdapter.event_to_animation(self.ui.events[-1])
        unknown_evt = CoreAdapter.event_to_animation(GameEvent())

        self.assertEqual(("DRAW", "JH"), (draw_evt.type, draw_evt.payload["card"]))
        self.assertEqual("MOVE", move_evt.type)
        self.assertEqual(["AD"], move_evt.payload["cards"])
        self.assertEqual((TABLEAU, 5), move_evt.payload["src"])
        self.assertEqual((FOUNDATION, 0), move_evt.payload["dest"])
        self.assertTrue(move_evt.payload["revealed"])
        self.assertEqual(("RECYCLE", 24), (recycle_evt.type, recycle_evt.payload["count"]))
        self.assertEqual("UNKNOWN", unknown_evt.type)

    def test_hint_highlight(self):
        stock = CoreAdapter.hint_to_highlight(self.core, HintResult(DRAW))
        self.assertEqual("HINT_STOCK", stock.type)
        self.assertEqual(HINT_PULSE_SEC, stock.payload["duration"])

        onto_king = CoreAdapter.hint_to_highlight(self.core, HintResult(MOVE, up("QH"), TABLEAU, 0))
        self.assertEqual("HINT", onto_king.type)
        self.assertEqual("QH", onto_king.payload["card"])
        self.assertEqual("KC", onto_king.payload["target_card"])

        to_foundation = CoreAdapter.hint_to_highlight(self.core, self.core.findHint())
        self.assertEqual("AD", to_foundation.payload["card"])
        self.assertEqual((FOUNDATION, 0), to_foundation.payload["target"])
        self.assertIsNone(to_foundation.payload["target_card"])

    def test_clock_text(self):
        self.assertEqual("0:00", CoreAdapter.clock_text(0))
        self.assertEqual("1:15", CoreAdapter.clock_text(75.9))
        self.assertEqual("61:01", CoreAdapter.clock_text(3661))


if __name__ == "__main__":
    unittest.main()
