"""
score_panel.py
--------------
State behind the end-of-run panel shown on game over and victory.

Tracks the initials being typed, whether the run was submitted, the
leaderboard rows on display and the player's rank. Leaderboard results
arrive asynchronously through apply_result(); the panel never blocks.
"""

from dino_deputy.core.services.leaderboard import (
    MAX_INITIALS,
    SCOPE_ALL_TIME,
    SCOPE_TODAY,
)

BOARD_SIZE = 5


class ScorePanel:
    """Initials entry plus the leaderboard view for one finished run."""

    def __init__(self):
        self.open(0)
        self.active = False

    def open(self, score: int, victory: bool = False, initials: str = ""):
        """Start a fresh panel for a run that just ended."""
        self.active = True
        self.score = score
        self.victory = victory
        self.initials = initials[:MAX_INITIALS].upper()
        self.submitted = False
        self.skipped = False
        self.scope = SCOPE_TODAY
        self.board = []
        self.rank = None
        self.status = "Loading scores..."

    def close(self):
        self.active = False

    @property
    def accepting_input(self) -> bool:
        return self.active and not (self.submitted or self.skipped)

    # ===========================================================
    # Initials Entry
    # ===========================================================

    def type_char(self, char: str) -> bool:
        """
        Append a letter or digit to the initials.

        Returns:
            True if the character was accepted
        """
        if not self.accepting_input or len(self.initials) >= MAX_INITIALS:
            return False
        if len(char) != 1 or not char.isalnum() or not char.isascii():
            return False
        self.initials += char.upper()
        return True

    def erase(self):
        if self.accepting_input:
            self.initials = self.initials[:-1]

    def confirm(self) -> bool:
        """
        Lock in the initials for submission.

        Returns:
            True if there is something to submit
        """
        if not self.accepting_input or not self.initials.strip():
            return False
        self.submitted = True
        self.status = "Submitting..."
        return True

    def skip(self):
        if self.accepting_input:
            self.skipped = True
            self.status = "Score not submitted"

    def toggle_scope(self) -> str:
        self.scope = SCOPE_ALL_TIME if self.scope == SCOPE_TODAY else SCOPE_TODAY
        self.board = []
        self.status = "Loading scores..."
        return self.scope

    # ===========================================================
    # Leaderboard Results
    # ===========================================================

    def apply_result(self, result) -> bool:
        """
        Fold a LeaderboardResult into the panel.

        Results tagged for another scope (the player switched tabs while the
        request was in flight) are ignored.

        Returns:
            True if a submit just succeeded (the caller should refresh rank
            and board)
        """
        if result.operation == "query":
            if result.tag != self.scope:
                return False
            self.board = list(result.value)[:BOARD_SIZE]
            self.status = "" if self.board else "No scores yet"
        elif result.operation == "rank":
            self.rank = result.value
        elif result.operation == "submit":
            if result.value is None:
                self.status = "Leaderboard unavailable"
                return False
            self.status = f"Submitted as {self.initials}"
            return True
        return False
