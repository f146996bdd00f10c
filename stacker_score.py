"""Score, combo streak and best score"""
from stacker_config import CONFIG


class ScoreTracker:
    """
    Points per placement plus a streak bonus for consecutive perfects.

    A perfect is worth PERFECT_BASE + streak * PERFECT_STEP, where `streak`
    is the count *before* this perfect is added. Any other placement is worth
    FLAT_POINTS and resets the streak.
    """
    def __init__(self, best: int = 0):
        self.score = 0
        self.best = best
        self.combo = 0
        self.last_award = 0

    def reset(self):
        self.score = 0
        self.combo = 0
        self.last_award = 0

    def award(self, perfect: bool) -> int:
        if perfect:
            points = CONFIG["PERFECT_BASE"] + self.combo * CONFIG["PERFECT_STEP"]
            self.combo += 1
        else:
            points = CONFIG["FLAT_POINTS"]
            self.combo = 0
        self.score += points
        self.last_award = points
        return points

    def break_streak(self):
        self.combo = 0

    def settle(self) -> bool:
        """Close the run; True when the score is a new best."""
        if self.score > self.best:
            self.best = self.score
            return True
        return False

    @property
    def is_record(self) -> bool:
        return self.score > 0 and self.score >= self.best
