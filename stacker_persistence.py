"""Best-score storage (a single JSON scalar under ~/.stacker)"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from stacker_config import CONFIG

logger = logging.getLogger(__name__)


class JsonBestScoreStore:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        if path is None:
            path = CONFIG["BEST_SCORE_PATH"]
        self.path = Path(path).expanduser()

    def load_best_score(self) -> int:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return max(0, int(data["best_score"]))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, KeyError, OverflowError) as e:
            logger.warning("Unreadable best score at %s (%s); starting from 0", self.path, e)
            return 0

    def save_best_score(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"best_score": int(score)}), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save best score to %s: %s", self.path, e)

    def clear_best_score(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not clear best score at %s: %s", self.path, e)


class MemoryBestScoreStore:
    """Keeps the best score for the life of the process only."""
    def __init__(self, best: int = 0):
        self.best = best

    def load_best_score(self) -> int:
        return self.best

    def save_best_score(self, score: int) -> None:
        self.best = score

    def clear_best_score(self) -> None:
        self.best = 0
