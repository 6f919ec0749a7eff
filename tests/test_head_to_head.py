"""
Tests for head-to-head statistics.

Validates:
1. Wins attributed by scoreline from the first team's side, either orientation
2. Swapping the query swaps home_wins/away_wins only
3. Only the most recent 50 encounters count
4. Derby flag threshold
"""

from btts.features.head_to_head import analyze_head_to_head, head_to_head_matches, is_derby
from btts.models import MatchRecord


def _m(home, away, hs, as_):
    return MatchRecord(home, away, hs, as_, hs > 0 and as_ > 0)


MEETINGS = [
    _m("Inter", "Milan", 2, 1),    # Inter win
    _m("Milan", "Inter", 1, 1),    # draw
    _m("Juventus", "Inter", 1, 0),  # unrelated
    _m("Milan", "Inter", 3, 0),    # Milan win
    _m("Milan", "Inter", 0, 2),    # Inter win (away)
]


class TestWinAttribution:

    def test_counts_from_first_team_side(self):
        h2h = analyze_head_to_head(MEETINGS, "Inter", "Milan")
        assert h2h.total_matches == 4
        assert h2h.home_wins == 2
        assert h2h.away_wins == 1
        assert h2h.draws == 1

    def test_recent_form_from_first_team_side(self):
        h2h = analyze_head_to_head(MEETINGS, "Inter", "Milan")
        assert h2h.recent_form == ("W", "D", "L", "W")

    def test_swap_symmetry(self):
        """analyze(A, B) and analyze(B, A) swap wins, keep totals and draws."""
        ab = analyze_head_to_head(MEETINGS, "Inter", "Milan")
        ba = analyze_head_to_head(MEETINGS, "Milan", "Inter")
        assert ab.total_matches == ba.total_matches
        assert ab.draws == ba.draws
        assert ab.home_wins == ba.away_wins
        assert ab.away_wins == ba.home_wins
        assert ba.recent_form == ("L", "D", "W", "L")

    def test_btts_count(self):
        h2h = analyze_head_to_head(MEETINGS, "Inter", "Milan")
        assert h2h.both_teams_scored_count == 2

    def test_no_meetings(self):
        h2h = analyze_head_to_head(MEETINGS, "Inter", "Napoli")
        assert h2h.total_matches == 0
        assert h2h.recent_form == ()


class TestWindow:

    def test_only_last_fifty(self):
        old_wins = [_m("A", "B", 1, 0)] * 10
        recent_draws = [_m("B", "A", 1, 1)] * 50
        h2h = analyze_head_to_head(old_wins + recent_draws, "A", "B")
        assert h2h.total_matches == 50
        assert h2h.draws == 50
        assert h2h.home_wins == 0

    def test_custom_window(self):
        assert len(head_to_head_matches(MEETINGS, "Inter", "Milan", window=2)) == 2

    def test_recent_form_length(self):
        matches = [_m("A", "B", 1, 0)] * 8
        assert len(analyze_head_to_head(matches, "A", "B", recent=5).recent_form) == 5


class TestDerby:

    def test_more_than_ten_meetings(self):
        matches = [_m("A", "B", 1, 1)] * 11
        assert is_derby(analyze_head_to_head(matches, "A", "B"))

    def test_exactly_ten_is_not_derby(self):
        matches = [_m("A", "B", 1, 1)] * 10
        assert not is_derby(analyze_head_to_head(matches, "A", "B"))
