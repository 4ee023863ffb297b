"""Unit tests for the need-tag suggestion heuristic."""

from caselink.services.matching import (
    HelperCandidate,
    matched_tags,
    merge_with_connected,
    normalize_tags,
    score_helper,
    suggest_helpers,
)


def _helper(helper_id, name, needs, active=True):
    return HelperCandidate(helper_id=helper_id, display_name=name, needs=needs, is_active=active)


def test_normalize_tags_trims_lowercases_and_dedupes():
    assert normalize_tags(["  Employment", "employment", "", "  ", "Housing "]) == ["employment", "housing"]
    assert normalize_tags(None) == []


def test_score_is_size_of_intersection():
    assert score_helper(["A", "B"], ["b", " a ", "c"]) == 2
    assert score_helper(["A"], ["C"]) == 0
    assert matched_tags(["B", "A"], ["a", "b"]) == ["b", "a"]


def test_ranking_by_shared_tags():
    helpers = [
        _helper("h1", "H1", ["A"]),
        _helper("h2", "H2", ["A", "B"]),
        _helper("h3", "H3", ["C"]),
    ]
    ranked = suggest_helpers(["A", "B"], helpers)
    assert [s.helper_id for s in ranked] == ["h2", "h1"]
    assert [s.score for s in ranked] == [2, 1]
    assert not any(s.already_connected for s in ranked)


def test_ties_keep_discovery_order():
    helpers = [_helper("h1", "First", ["x"]), _helper("h2", "Second", ["x"]), _helper("h3", "Third", ["x"])]
    assert [s.helper_id for s in suggest_helpers(["X"], helpers)] == ["h1", "h2", "h3"]


def test_inactive_helpers_are_not_suggested():
    helpers = [_helper("h1", "Gone", ["a"], active=False), _helper("h2", "Here", ["a"])]
    assert [s.helper_id for s in suggest_helpers(["a"], helpers)] == ["h2"]


def test_client_without_tags_gets_no_fresh_suggestions():
    assert suggest_helpers([], [_helper("h1", "H1", ["a"])]) == []
    assert suggest_helpers(["  "], [_helper("h1", "H1", ["a"])]) == []


def test_connected_helpers_listed_even_without_tags():
    connected = [(_helper("h9", "Connected", ["z"]), "complete")]
    merged = merge_with_connected([], connected, suggest_helpers([], []))
    assert len(merged) == 1
    assert merged[0].helper_id == "h9"
    assert merged[0].connection_status == "complete"
    assert merged[0].already_connected
    assert merged[0].score == 0


def test_merge_puts_connected_first_and_dedupes_by_name():
    helpers = [_helper("h1", "Sarah Martinez", ["a", "b"]), _helper("h2", "James Wilson", ["a"])]
    fresh = suggest_helpers(["a", "b"], helpers)
    connected = [(_helper("h2", "James Wilson", ["a"]), "active")]

    merged = merge_with_connected(["a", "b"], connected, fresh)
    assert [s.helper_id for s in merged] == ["h2", "h1"]
    assert merged[0].connection_status == "active"
    assert merged[1].connection_status is None


def test_merge_dedupe_is_case_insensitive():
    fresh = suggest_helpers(["a"], [_helper("h2", "sarah martinez", ["a"])])
    connected = [(_helper("h1", "Sarah Martinez ", ["a"]), "pending")]
    merged = merge_with_connected(["a"], connected, fresh)
    assert [s.helper_id for s in merged] == ["h1"]
