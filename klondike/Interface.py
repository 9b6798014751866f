from klondike.Core import GameEvent, GameStats


class Interface:
    """
    Collaborator of the core: receives redraw notifications, feedback cues and
    the end-of-game statistics. Every hook is optional.
    """

    def __init__(self):
        self.core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked after a draw, recycle or card move has been applied.
        :param event:
        :return:
        """
        self.notifyRedraw()

    def onUndo(self):
        self.notifyRedraw()

    def onFeedback(self, style: str):
        """
        Semantic feedback cue: one of "light", "medium", "heavy", "success".
        """
        pass

    def notifyRedraw(self):
        pass

    def onWin(self, stats: GameStats):
        pass
