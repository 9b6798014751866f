import json
import logging
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

STATS_PATH = Path(__file__).with_name("stats.json")


def _default_stats():
    return {
        "games_started": 0,
        "games_won": 0,
        "total_duration_sec": 0.0,
        "total_moves": 0,
        "current_streak": 0,
        "best_streak": 0,
        "last_win_date": None,
    }


def _as_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _as_float(value, default=0.0):
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def _as_date(value):
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def _sanitize(data):
    out = _default_stats()
    if not isinstance(data, dict):
        return out
    out["games_started"] = max(0, _as_int(data.get("games_started"), 0))
    out["games_won"] = max(0, _as_int(data.get("games_won"), 0))
    out["total_duration_sec"] = max(0.0, _as_float(data.get("total_duration_sec"), 0.0))
    out["total_moves"] = max(0, _as_int(data.get("total_moves"), 0))
    out["current_streak"] = max(0, _as_int(data.get("current_streak"), 0))
    out["best_streak"] = max(out["current_streak"], _as_int(data.get("best_streak"), 0))
    last_win = _as_date(data.get("last_win_date"))
    out["last_win_date"] = last_win.isoformat() if last_win else None
    return out


def load_stats():
    if not STATS_PATH.exists():
        return _default_stats()
    try:
        return _sanitize(json.loads(STATS_PATH.read_text(encoding="utf-8")))
    except (OSError, ValueError):
        logger.warning("unreadable statistics file %s, starting fresh", STATS_PATH)
        return _default_stats()


def save_stats(stats):
    STATS_PATH.parent.mkdir(parents=True, exist_ok=True)
    STATS_PATH.write_text(json.dumps(_sanitize(stats), ensure_ascii=False, indent=2), encoding="utf-8")


def record_game_started(stats):
    stats = _sanitize(stats)
    stats["games_started"] += 1
    return stats


def record_game_won(stats, duration_sec, moves, today=None):
    """
    Adds a win. The streak counts days with at least one win: a second win on
    the same day leaves it unchanged, a missed day restarts it at 1.
    """
    stats = _sanitize(stats)
    today = today or date.today()
    stats["games_won"] += 1
    stats["total_duration_sec"] += max(0.0, float(duration_sec))
    stats["total_moves"] += max(0, int(moves))

    last_win = _as_date(stats["last_win_date"])
    if last_win != today:
        if last_win is None or (today - last_win).days > 1:
            stats["current_streak"] = 0
        stats["current_streak"] += 1
        stats["last_win_date"] = today.isoformat()
    stats["best_streak"] = max(stats["best_streak"], stats["current_streak"])
    return stats


def current_streak(stats, today=None):
    stats = _sanitize(stats)
    today = today or date.today()
    last_win = _as_date(stats["last_win_date"])
    if last_win is None or (today - last_win).days > 1:
        return 0
    return stats["current_streak"]
