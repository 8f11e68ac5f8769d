"""
Tests for exclusion sets.
"""

from roadnet.core.exclusions import ExclusionSet, is_excluded, normalize_pair


def test_membership_is_direction_agnostic():
    """(a, b) and (b, a) are the same pair."""
    blocked = ExclusionSet()
    blocked.add("b", "a")
    assert ("a", "b") in blocked
    assert ("b", "a") in blocked
    assert ("a", "c") not in blocked
    assert len(blocked) == 1


def test_discard_either_direction():
    """Removing uses the same normalization."""
    blocked = ExclusionSet([("a", "b"), ("c", "d")])
    blocked.discard("b", "a")
    assert ("a", "b") not in blocked
    assert list(blocked) == [("c", "d")]
    blocked.clear()
    assert not blocked


def test_with_pair_leaves_original_untouched():
    """Derived sets are independent copies."""
    blocked = ExclusionSet([("a", "b")])
    derived = blocked.with_pair("c", "b")
    assert ("b", "c") in derived
    assert ("b", "c") not in blocked
    assert derived != blocked
    assert derived.copy() == derived


def test_is_excluded_with_plain_set():
    """Searches accept plain tuple sets and check both orientations."""
    assert is_excluded({("b", "a")}, "a", "b")
    assert is_excluded({("a", "b")}, "b", "a")
    assert not is_excluded(set(), "a", "b")
    assert not is_excluded(None, "a", "b")


def test_normalize_and_odd_members():
    """Pairs are ordered and non-pairs are never members."""
    assert normalize_pair("z", "a") == ("a", "z")
    blocked = ExclusionSet([("a", "b")])
    assert "ab" not in blocked
    assert ("a", "b", "c") not in blocked
    assert ("a", 1) not in blocked
