"""Unit tests for the KMP prefix table and scan.

Tests cover:
  - PrefixTable construction and its step count
  - kmp_search matches, overlaps and operation counters
  - argument validation and the empty-input policy
"""

import random

import pytest

from algorithms import (
    InvalidArgument,
    OperationCounters,
    PrefixTable,
    ScanResult,
    brute_force_search,
    build_prefix_table,
    kmp_search,
)

GOAL_TEXT = "He scored a late " + "goal" + " in the final minute to win the match 2-1"


def naive_offsets(text, pattern):
    return [s for s in range(len(text) - len(pattern) + 1) if text[s:s + len(pattern)] == pattern]


# ===========================================================================
# PrefixTable
# ===========================================================================


class TestPrefixTable:
    @pytest.mark.parametrize(
        "pattern, expected",
        [
            ("", []),
            ("a", [0]),
            ("abcd", [0, 0, 0, 0]),
            ("aaaa", [0, 1, 2, 3]),
            ("ababaca", [0, 0, 1, 2, 3, 0, 1]),
            ("abcabd", [0, 0, 0, 1, 2, 0]),
            ("aabaaab", [0, 1, 0, 1, 2, 2, 3]),
        ],
    )
    def test_lps_values(self, pattern, expected):
        assert list(build_prefix_table(pattern)) == expected

    def test_empty_pattern_takes_no_steps(self):
        table = build_prefix_table("")
        assert len(table) == 0
        assert table.steps == 0

    def test_single_character(self):
        table = build_prefix_table("z")
        assert table.lps == (0,)
        assert table.steps == 0

    @pytest.mark.parametrize("pattern", ["goal", "xyz", "abcdefgh", "q"])
    def test_distinct_characters(self, pattern):
        """No self-overlap: all zeros, one step per index after the first."""
        table = build_prefix_table(pattern)
        assert list(table) == [0] * len(pattern)
        assert table.steps == len(pattern) - 1

    def test_steps_count_retreats(self):
        # "aab": index 2 compares 'b' with 'a', retreats once, then fails against pattern[0]
        assert build_prefix_table("aab").steps == 3

    def test_steps_bounded_by_twice_length(self):
        rng = random.Random(7)
        for _ in range(200):
            pattern = "".join(rng.choice("ab") for _ in range(rng.randint(1, 30)))
            table = build_prefix_table(pattern)
            assert len(pattern) - 1 <= table.steps <= 2 * (len(pattern) - 1)

    def test_invariants_hold(self):
        rng = random.Random(11)
        for _ in range(200):
            pattern = "".join(rng.choice("abc") for _ in range(rng.randint(1, 25)))
            table = build_prefix_table(pattern)
            assert table[0] == 0
            for i, value in enumerate(table):
                assert 0 <= value <= i
                assert pattern[:value] == pattern[i + 1 - value:i + 1]

    def test_table_is_immutable(self):
        table = build_prefix_table("abab")
        with pytest.raises(TypeError):
            table.lps[0] = 5
        with pytest.raises(AttributeError):
            table.lps = (9, 9, 9, 9)
        with pytest.raises(AttributeError):
            table.steps = 0
        with pytest.raises(AttributeError):
            del table.lps
        assert table.lps == (0, 0, 1, 2)
        assert table.steps == 3

    def test_hash_is_stable_as_dict_key(self):
        table = build_prefix_table("abab")
        cache = {table: "abab"}
        with pytest.raises(AttributeError):
            table.steps = 99
        assert cache[table] == "abab"

    def test_build_classmethod_matches_function(self):
        assert PrefixTable.build("abab") == build_prefix_table("abab")

    def test_none_pattern_raises(self):
        with pytest.raises(InvalidArgument):
            build_prefix_table(None)

    def test_accepts_non_string_sequences(self):
        assert list(build_prefix_table([1, 2, 1, 2])) == [0, 0, 1, 2]
        assert list(build_prefix_table(b"abab")) == [0, 0, 1, 2]


# ===========================================================================
# kmp_search
# ===========================================================================


class TestKmpSearch:
    def test_goal_scenario(self):
        assert len(GOAL_TEXT) == 62
        result = kmp_search(GOAL_TEXT, "goal")
        assert result.matches == (17,)
        assert result.counters.char_comparisons == 62
        assert result.counters.fallback_steps == 0
        assert result.counters.lps_computations == 3
        assert result.counters.match_fallbacks == 1

    def test_overlapping_matches(self):
        result = kmp_search("aaa", "aa")
        assert result.matches == (0, 1)
        assert result.counters.match_fallbacks == 2
        assert result.counters.fallback_steps == 0

    def test_no_match(self):
        result = kmp_search("abc", "xyz")
        assert result.matches == ()
        assert result.counters.char_comparisons == 3
        assert result.counters.fallback_steps == 0
        assert not result.found

    def test_pattern_longer_than_text(self):
        result = kmp_search("ab", "abc")
        assert result.matches == ()
        assert result.counters.char_comparisons == 2

    @pytest.mark.parametrize(
        "text, pattern, expected",
        [
            ("ababcababa", "aba", (0, 5, 7)),
            ("aaaaa", "aa", (0, 1, 2, 3)),
            ("abcdef", "gh", ()),
            ("pattern", "pattern", (0,)),
            ("abababab", "abab", (0, 2, 4)),
        ],
    )
    def test_matches(self, text, pattern, expected):
        result = kmp_search(text, pattern)
        assert result.matches == expected
        assert result.count == len(expected)

    def test_mismatch_fallback_is_counted(self):
        # after "ab" matches, 'a' != 'c' retreats j to 0 and re-compares
        result = kmp_search("aba", "abc")
        assert result.counters.fallback_steps == 1
        assert result.counters.char_comparisons == 4

    @pytest.mark.parametrize("text, pattern", [("", "abc"), ("abc", ""), ("", "")])
    def test_empty_inputs_give_empty_result(self, text, pattern):
        result = kmp_search(text, pattern)
        assert result.matches == ()
        assert result.counters == OperationCounters()
        assert result.elapsed is None

    def test_none_arguments_raise(self):
        with pytest.raises(InvalidArgument):
            kmp_search(None, "a")
        with pytest.raises(InvalidArgument):
            kmp_search("a", None)

    def test_mismatched_table_raises(self):
        table = build_prefix_table("abc")
        with pytest.raises(InvalidArgument):
            kmp_search("abcabc", "ab", table)

    @pytest.mark.parametrize("table", [[0, 0], (0, 0), "ab"])
    def test_table_of_wrong_type_raises(self, table):
        with pytest.raises(InvalidArgument):
            kmp_search("abab", "ab", table)

    def test_prebuilt_table_is_reused(self):
        table = build_prefix_table("aba")
        first = kmp_search("abababa", "aba", table)
        second = kmp_search("xxabaxx", "aba", table)
        assert first.matches == (0, 2, 4)
        assert second.matches == (2,)
        assert first.counters.lps_computations == table.steps

    def test_idempotent(self):
        assert kmp_search("abracadabra", "abra") == kmp_search("abracadabra", "abra")

    def test_bytes_and_lists(self):
        assert kmp_search(b"xabab", b"ab").matches == (1, 3)
        assert kmp_search([1, 2, 1, 2, 1], [1, 2, 1]).matches == (0, 2)

    def test_case_sensitive(self):
        assert kmp_search("Goal goal", "goal").matches == (5,)


class TestKmpProperties:
    """Randomized checks against direct slicing and the brute-force baseline."""

    def test_sound_and_complete(self):
        rng = random.Random(2024)
        for _ in range(500):
            text = "".join(rng.choice("ab") for _ in range(rng.randint(0, 40)))
            pattern = "".join(rng.choice("ab") for _ in range(rng.randint(1, 5)))
            result = kmp_search(text, pattern)
            assert list(result.matches) == naive_offsets(text, pattern)
            assert result.matches == brute_force_search(text, pattern).matches

    def test_offsets_strictly_increasing(self):
        result = kmp_search("a" * 50, "aaa")
        assert all(a < b for a, b in zip(result.matches, result.matches[1:]))

    def test_comparison_bounds(self):
        rng = random.Random(99)
        for _ in range(500):
            text = "".join(rng.choice("abc") for _ in range(rng.randint(1, 60)))
            pattern = "".join(rng.choice("abc") for _ in range(rng.randint(1, 6)))
            counters = kmp_search(text, pattern).counters
            n = len(text)
            assert counters.char_comparisons == n + counters.fallback_steps
            assert n <= counters.char_comparisons <= 2 * n
            assert counters.match_fallbacks == len(naive_offsets(text, pattern))

    def test_no_self_overlap_stays_near_text_length(self):
        text = "the quick brown fox jumps over the lazy dog " * 10
        counters = kmp_search(text, "fox").counters
        assert counters.char_comparisons <= len(text) + text.count("f")


class TestResultRecords:
    def test_counters_add(self):
        total = OperationCounters(1, 2, 3, 4) + OperationCounters(10, 20, 30, 40)
        assert total == OperationCounters(11, 22, 33, 44)

    def test_counters_to_dict(self):
        assert OperationCounters(5, 1, 0, 2).to_dict() == {
            "char_comparisons": 5,
            "lps_computations": 1,
            "fallback_steps": 0,
            "match_fallbacks": 2,
        }

    def test_with_elapsed_returns_copy(self):
        result = ScanResult(matches=(1,))
        timed = result.with_elapsed(0.5)
        assert timed.elapsed == 0.5
        assert result.elapsed is None
        assert timed.matches == (1,)
