"""
Tests for the match status / score state machine and its history ledger.
"""

from datetime import datetime, timezone

import pytest

from fixturedesk.exceptions import InvalidScoreInput, MatchNotFound, MissingScores
from fixturedesk.schemas import Match, MatchState, MatchStatus
from fixturedesk.services import fixture_builder
from fixturedesk.services.match_state import (
    ScoreEdit,
    StatusChange,
    apply,
    apply_score_edit,
    apply_status,
    parse_score_input,
    update_match_in_tournament,
)
from tests.conftest import make_players, make_tournament

NOW = datetime(2026, 3, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def match() -> Match:
    return Match(id="match-1", player1_id="p1", player2_id="p2")


@pytest.mark.parametrize(
    "requested,expected",
    [
        (MatchStatus.WALKOVER_P1, (1, 0)),
        (MatchStatus.WALKOVER_P2, (0, 1)),
        (MatchStatus.DISQUALIFIED, (0, 0)),
    ],
)
def test_forced_results_complete_with_fixed_scores(match, requested, expected):
    result = apply_status(match, requested, "admin", now=NOW)

    assert (result.score_p1, result.score_p2, result.status) == (*expected, MatchStatus.COMPLETED)
    assert len(result.history) == 1
    entry = result.history[0]
    assert entry.new_state == MatchState(score_p1=expected[0], score_p2=expected[1], status=MatchStatus.COMPLETED)
    assert entry.old_state == MatchState(score_p1=None, score_p2=None, status=MatchStatus.SCHEDULED)
    assert entry.changed_by == "admin"
    assert entry.timestamp == NOW
    assert entry.reason == f"Status changed to {requested.value}"


def test_walkover_reachable_from_completed(match):
    scored = apply_score_edit(apply_score_edit(match, "P1", 3, "admin"), "P2", 5, "admin")
    done = apply_status(scored, MatchStatus.COMPLETED, "admin")
    result = apply_status(done, MatchStatus.WALKOVER_P2, "admin")
    assert (result.score_p1, result.score_p2, result.status) == (0, 1, MatchStatus.COMPLETED)


@pytest.mark.parametrize("requested", [MatchStatus.SCHEDULED, MatchStatus.IN_PROGRESS])
def test_reset_statuses_clear_scores(match, requested):
    scored = apply_score_edit(apply_score_edit(match, "P1", 11, "admin"), "P2", 7, "admin")
    result = apply_status(scored, requested, "admin")

    assert result.status == requested
    assert result.score_p1 is None and result.score_p2 is None
    assert result.history[-1].old_state.score_p1 == 11


def test_complete_requires_both_scores(match):
    half = apply_score_edit(match, "P2", 4, "admin")

    with pytest.raises(MissingScores):
        apply_status(half, MatchStatus.COMPLETED, "admin")

    assert half.status == MatchStatus.SCHEDULED
    assert len(half.history) == 1


def test_complete_with_null_score_leaves_history_untouched(match):
    with pytest.raises(MissingScores):
        apply_status(match, MatchStatus.COMPLETED, "admin")
    assert match.history == []
    assert match.status == MatchStatus.SCHEDULED


def test_complete_with_scores_keeps_them(match):
    scored = apply_score_edit(apply_score_edit(match, "P1", 21, "admin"), "P2", 15, "admin")
    result = apply_status(scored, MatchStatus.COMPLETED, "admin")
    assert (result.score_p1, result.score_p2, result.status) == (21, 15, MatchStatus.COMPLETED)


def test_score_edit_does_not_change_status(match):
    in_progress = apply_status(match, MatchStatus.IN_PROGRESS, "admin")
    result = apply_score_edit(in_progress, "P1", "6", "desk")

    assert result.status == MatchStatus.IN_PROGRESS
    assert result.score_p1 == 6
    assert result.history[-1].reason == "Score updated for P1"
    assert result.history[-1].changed_by == "desk"


def test_score_edit_blank_clears(match):
    scored = apply_score_edit(match, "P2", 9, "admin")
    cleared = apply_score_edit(scored, "P2", "  ", "admin")
    assert cleared.score_p2 is None
    assert len(cleared.history) == 2


def test_invalid_score_rejected_without_change(match):
    scored = apply_score_edit(match, "P1", 2, "admin")
    with pytest.raises(InvalidScoreInput):
        apply_score_edit(scored, "P1", "abc", "admin")
    assert scored.score_p1 == 2
    assert len(scored.history) == 1


@pytest.mark.parametrize(
    "raw,expected",
    [(None, None), ("", None), (" 7 ", 7), (0, 0), ("12", 12), ("-1", -1)],
)
def test_parse_score_input(raw, expected):
    assert parse_score_input(raw) == expected


@pytest.mark.parametrize("raw", ["x", "1.5", 2.5, True, [1]])
def test_parse_score_input_rejects(raw):
    with pytest.raises(InvalidScoreInput):
        parse_score_input(raw)


def test_history_chains_old_to_new(match):
    """N edits -> N entries; each old_state equals the previous new_state."""
    requests = [
        StatusChange(MatchStatus.IN_PROGRESS),
        ScoreEdit("P1", 5),
        ScoreEdit("P2", "3"),
        StatusChange(MatchStatus.COMPLETED),
        ScoreEdit("P2", ""),
        StatusChange(MatchStatus.WALKOVER_P1),
        StatusChange(MatchStatus.SCHEDULED),
    ]
    current = match
    for req in requests:
        current = apply(current, req, "admin")

    assert len(current.history) == len(requests)
    assert current.history[0].old_state == match.state()
    for prev, nxt in zip(current.history, current.history[1:]):
        assert nxt.old_state == prev.new_state
    assert current.history[-1].new_state == current.state()


def test_apply_returns_new_value(match):
    result = apply(match, StatusChange(MatchStatus.IN_PROGRESS), "admin")
    assert result is not match
    assert match.status == MatchStatus.SCHEDULED
    assert match.history == []


def test_apply_rejects_unknown_request(match):
    with pytest.raises(TypeError):
        apply(match, "Completed", "admin")


def test_update_match_in_tournament(rng):
    tournament = fixture_builder.build(make_tournament(make_players(4)), "Open", "Men Singles", rng=rng)
    target = tournament.fixtures[0].groups[0].matches[1]

    result = update_match_in_tournament(tournament, target.id, StatusChange(MatchStatus.DISQUALIFIED), "admin")

    _, _, updated = fixture_builder.find_match(result, target.id)
    assert (updated.score_p1, updated.score_p2, updated.status) == (0, 0, MatchStatus.COMPLETED)
    _, _, original = fixture_builder.find_match(tournament, target.id)
    assert original.history == []


def test_update_match_in_tournament_unknown_match(rng):
    tournament = fixture_builder.build(make_tournament(make_players(4)), "Open", "Men Singles", rng=rng)
    with pytest.raises(MatchNotFound):
        update_match_in_tournament(tournament, "nope", ScoreEdit("P1", 1), "admin")
