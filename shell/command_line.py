import argparse
import logging
import time

from klondike.Card import FOUNDATION, TABLEAU, Card
from klondike.Core import Core
from klondike.Interface import Interface
from shell.adapter import CoreAdapter
from shell.settings_store import build_config, load_settings
from shell.stats_store import current_streak, load_stats, record_game_started, record_game_won, save_stats
from shell.ui_config import AUTO_COMPLETE_START_DELAY_SEC, AUTO_COMPLETE_STEP_DELAY_SEC, STREAK_MILESTONE
from solver.hint import DRAW

HELP = """Commands:
  d, draw                 draw from the stock (recycles the waste when empty)
  mv <card> <f0-f3|t0-t6> move a card and everything above it, e.g. mv 10H t3
  auto <card>             send a card to the first foundation that takes it
  tap <card>              move a card to its best target
  hint                    suggest a move
  undo                    take back the last action
  new                     deal a new game
  quit                    leave"""


class CommandLineInterface(Interface):

    def printAll(self):
        core = self.core
        waste = core.waste[-1].gameStr() if core.waste else "--"
        print(f"Moves: {core.moves}    Time: {CoreAdapter.clock_text(core.elapsed)}    "
              f"Stock: {len(core.stock)}    Waste: {waste}")
        line = ""
        for i, foundation in enumerate(core.foundations):
            top = foundation[-1].gameStr() if foundation else "--"
            line += f"f{i}: {top:<5}"
        print(line)
        print("----t0----t1----t2----t3----t4----t5----t6---")
        i = 0
        while True:
            has = False
            line = f"{i:>2}: "
            for pile in core.tableau:
                if len(pile) <= i:
                    line += "      "
                    continue
                has = True
                line += f"{pile[i].gameStr():<6}"
            if not has:
                break
            print(line)
            i += 1
        print()

    def onStart(self):
        stats = load_stats()
        save_stats(record_game_started(stats))
        print(f"Game started! Current streak: {current_streak(stats)}")
        self.printAll()

    def notifyRedraw(self):
        self.printAll()

    def onWin(self, stats):
        data = record_game_won(load_stats(), stats.elapsedTime, stats.moveCount)
        save_stats(data)
        print(f"You win! {stats.moveCount} moves in {CoreAdapter.clock_text(stats.elapsedTime)}.")
        streak = data["current_streak"]
        if streak > 0 and streak % STREAK_MILESTONE == 0:
            print(f"Streak milestone: {streak} days!")
        else:
            print(f"Streak: {streak}")


def parseTarget(text: str):
    text = text.strip().lower()
    if len(text) < 2 or text[0] not in "ft":
        raise ValueError(f"invalid pile: {text!r}")
    kind = FOUNDATION if text[0] == "f" else TABLEAU
    return kind, int(text[1:])


def describeHint(hint):
    if hint is None:
        return "No moves left."
    if hint.kind == DRAW:
        return "Hint: draw from the stock."
    return f"Hint: {hint.card.gameStr()} -> {hint.target_kind[0]}{hint.target_index}"


def handleCommand(core: Core, line: str):
    """
    Runs one shell command against ``core``.
    :return: a message for the player, or None
    """
    words = line.split()
    if len(words) == 0:
        return None
    command = words[0].lower()
    if command in ("d", "draw"):
        if not core.drawFromStock():
            return "No card left!"
    elif command == "mv":
        if len(words) != 3:
            return "Usage: mv <card> <f0-f3|t0-t6>"
        try:
            card = Card.parse(words[1])
            kind, idx = parseTarget(words[2])
        except ValueError:
            return "Invalid card or pile!"
        if not core.moveCard(card, kind, idx):
            return "Cannot move!"
    elif command in ("auto", "tap"):
        if len(words) != 2:
            return f"Usage: {command} <card>"
        try:
            card = Card.parse(words[1])
        except ValueError:
            return "Invalid card!"
        if command == "auto":
            ok = core.autoMoveToFoundation(card)
        else:
            best = core.findBestMoveForCard(card)
            ok = best is not None and core.applyHint(best)
        if not ok:
            return "Cannot move!"
    elif command == "hint":
        return describeHint(core.findHint())
    elif command == "undo":
        if not core.undo():
            return "Cannot undo!"
    elif command == "new":
        core.newGame()
    elif command == "help":
        return HELP
    else:
        return "Invalid command!"
    return None


def runPacedAutoComplete(core: Core, sleep=time.sleep):
    if not core.canAutoComplete():
        return 0
    sleep(AUTO_COMPLETE_START_DELAY_SEC)
    count = 0
    while core.autoCompleteStep():
        count += 1
        sleep(AUTO_COMPLETE_STEP_DELAY_SEC)
    return count


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Klondike patience in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Deal a fixed game.")
    parser.add_argument("--verbose", action="store_true", help="Log engine decisions.")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings["log_level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(settings)
    if args.seed is not None:
        config.seed = args.seed
    paced = not config.autoComplete

    interface = CommandLineInterface()
    core = Core()
    core.registerInterface(interface)
    core.newGame(config)
    print(HELP)
    last = time.monotonic()
    while True:
        try:
            command = input("> ")
        except EOFError:
            break
        now = time.monotonic()
        core.tick(now - last)
        last = now
        if command.strip().lower() in ("q", "quit", "exit"):
            break
        message = handleCommand(core, command)
        if message:
            print(message)
        if paced:
            runPacedAutoComplete(core)


if __name__ == "__main__":
    main()
