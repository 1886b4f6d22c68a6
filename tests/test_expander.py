import pytest

import pathfinder.expander as expander
from pathfinder.errors import TargetError


WORDS = {"WL1": ["a", "b", "c"], "WL2": ["x", "y"]}


def test_cartesian_cardinality_and_no_leftover_markers():
    targets = list(expander.expand_template("https://WL1.WL2.example.com", WORDS))
    assert len(targets) == 3 * 2
    assert len(set(targets)) == 6
    for t in targets:
        assert "WL1" not in t and "WL2" not in t


def test_leftmost_marker_expands_first():
    targets = list(expander.expand_template("WL2-WL1", WORDS))
    assert targets == ["x-a", "x-b", "x-c", "y-a", "y-b", "y-c"]


def test_same_marker_twice_is_lockstep():
    targets = list(expander.expand_template("WL1.example.com/WL1", WORDS))
    assert targets == ["a.example.com/a", "b.example.com/b", "c.example.com/c"]


def test_no_marker_passthrough():
    assert list(expander.expand_template("example.com", WORDS)) == ["example.com"]


def test_longest_marker_wins_on_same_position():
    words = {"WL1": ["short"], "WL10": ["long"]}
    assert list(expander.expand_template("WL10.example.com", words)) == ["long.example.com"]


def test_prefix_marker_before_longer_marker():
    words = {"WL1": ["a", "b"], "WL10": ["x", "y", "z"]}
    targets = list(expander.expand_template("WL1-WL10.example.com", words))
    assert len(targets) == 2 * 3
    assert targets[:3] == ["a-x.example.com", "a-y.example.com", "a-z.example.com"]
    assert "b-z.example.com" in targets
    assert all("WL1" not in t for t in targets)


def test_longer_marker_before_prefix_marker():
    words = {"WL1": ["a", "b"], "WL10": ["x", "y", "z"]}
    targets = list(expander.expand_template("WL10-WL1.example.com", words))
    assert len(targets) == 3 * 2
    assert targets[:2] == ["x-a.example.com", "x-b.example.com"]
    assert all("WL1" not in t for t in targets)


def test_prefix_marker_alone_is_not_found_inside_longer_one():
    words = {"WL1": ["a"], "WL10": ["x"]}
    assert expander.find_markers("WL10.example.com", words) == ["WL10"]
    assert expander.find_markers("WL1.WL10.WL1", words) == ["WL1", "WL10"]
    assert not expander.has_markers("example.com", words)


def test_word_containing_its_own_marker_terminates():
    words = {"WL1": ["xWL1x"]}
    assert list(expander.expand_template("WL1.com", words)) == ["xWL1x.com"]


def test_unused_wordlist_does_not_multiply():
    targets = list(expander.expand_template("WL1.example.com", WORDS))
    assert len(targets) == 3


def test_empty_wordlist_yields_nothing():
    assert list(expander.expand_template("WL1.example.com", {"WL1": []})) == []


def test_extension_multiplication():
    out = expander.apply_extensions(["A", "B"], ["php", ".html"])
    assert out == ["A.php", "A.html", "B.php", "B.html"]
    assert all(".." not in t for t in out)


def test_extension_dot_slash_prefix():
    assert expander.apply_extensions(["A"], ["./html"]) == ["A.html"]


def test_no_extensions_keeps_targets():
    assert expander.apply_extensions(["A", "B"], []) == ["A", "B"]
    assert expander.apply_extensions(["A"], ["", "."]) == ["A"]


def test_subdomain_fallback_strips_scheme_and_www():
    out = expander.subdomain_fallback_targets("https://www.example.com", ["api", "dev"])
    assert out == ["api.example.com", "dev.example.com"]


def test_directory_fallback_normalizes_url():
    assert expander.directory_fallback_targets("example.com/", ["admin"]) == [
        "http://example.com/admin"
    ]
    assert expander.directory_fallback_targets("https://example.com", ["x"]) == [
        "https://example.com/x"
    ]


def test_build_subdomain_targets_prefers_markers():
    out = expander.build_subdomain_targets("WL2.example.com", WORDS)
    assert out == ["x.example.com", "y.example.com"]


def test_build_subdomain_targets_fallback():
    out = expander.build_subdomain_targets("example.com", {"WL1": ["api"]})
    assert out == ["api.example.com"]


def test_build_directory_targets_with_extensions():
    out = expander.build_directory_targets("http://h/", {"WL1": ["a", "b"]}, ["php"])
    assert out == ["http://h/a.php", "http://h/b.php"]


def test_no_strategy_is_fatal():
    with pytest.raises(TargetError):
        expander.build_subdomain_targets("example.com", {"SUB": ["a"]})
    with pytest.raises(TargetError):
        expander.build_directory_targets("example.com", {"SUB": ["a"]})
