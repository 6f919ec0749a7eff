"""
Tests for match feed parsing.

Validates:
1. Header and blank lines skipped, feed order preserved
2. BTTS token is the literal "True" after trimming whitespace
3. Malformed rows skipped with a reason, never turned into NaN scores
4. Missing BTTS column derived from the scoreline
"""

from btts.etl.csv_feed import parse_match_feed, validate_row
from btts.models import MatchRecord

HEADER = "home_team,away_team,home_score,away_score,both_teams_scored"


class TestParseMatchFeed:

    def test_basic_feed(self):
        text = "\n".join([
            HEADER,
            "Real Madrid,Barcelona,2,1,True",
            "Juventus,Milan,2,0,False",
        ])
        result = parse_match_feed(text)
        assert result.matches == [
            MatchRecord("Real Madrid", "Barcelona", 2, 1, True),
            MatchRecord("Juventus", "Milan", 2, 0, False),
        ]
        assert result.skipped_count == 0

    def test_blank_lines_and_crlf(self):
        text = HEADER + "\r\n\r\nA,B,1,1,True\r\n   \r\nC,D,0,0,False\r\n"
        result = parse_match_feed(text)
        assert [m.home_team for m in result.matches] == ["A", "C"]
        assert result.skipped_count == 0

    def test_whitespace_around_boolean(self):
        result = parse_match_feed(HEADER + "\nA,B,1,1, True \nC,D,1,1,true")
        assert result.matches[0].both_teams_scored is True
        # only the literal "True" counts
        assert result.matches[1].both_teams_scored is False

    def test_header_only(self):
        assert parse_match_feed(HEADER).matches == []

    def test_empty_text(self):
        assert parse_match_feed("").matches == []


class TestMalformedRows:

    def test_non_numeric_score_skipped(self):
        text = "\n".join([HEADER, "A,B,two,1,True", "C,D,1,1,True"])
        result = parse_match_feed(text)
        assert len(result.matches) == 1
        assert result.rejected[0].reason == "score_not_numeric"
        assert result.rejected[0].line_number == 2

    def test_negative_score_skipped(self):
        result = parse_match_feed(HEADER + "\nA,B,-1,0,False")
        assert result.matches == []
        assert result.rejected[0].reason == "score_negative"

    def test_missing_fields_skipped(self):
        result = parse_match_feed(HEADER + "\nA,B,1")
        assert result.rejected[0].reason == "missing_fields"

    def test_missing_team_skipped(self):
        result = parse_match_feed(HEADER + "\n,B,1,0,False")
        assert result.rejected[0].reason == "missing_team"

    def test_no_nan_propagates(self):
        text = "\n".join([HEADER, "A,B,,1,True", "A,B,1,1,True"])
        result = parse_match_feed(text)
        assert all(isinstance(m.home_score, int) for m in result.matches)
        assert result.skipped_count == 1


class TestMissingBoolean:

    def test_derived_from_score(self):
        text = "\n".join([HEADER, "A,B,1,2", "C,D,3,0,"])
        result = parse_match_feed(text)
        assert result.matches[0].both_teams_scored is True
        assert result.matches[1].both_teams_scored is False
        assert len(result.warnings) == 2
        assert result.skipped_count == 0


class TestValidateRow:

    def test_usable(self):
        validation = validate_row(["A", "B", " 3 ", "1", "True"])
        assert validation.is_usable
        assert validation.record.home_score == 3

    def test_team_names_trimmed(self):
        validation = validate_row([" A ", "B ", "0", "0", "False"])
        assert validation.record.home_team == "A"
        assert validation.record.away_team == "B"
