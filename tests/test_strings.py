import pytest

from ftkit.strings import (
    compare,
    compare_n,
    find_char,
    find_in,
    find_last_char,
    iter_indexed,
    join,
    map_indexed,
    split,
    strlcat,
    strlcpy,
    substr,
    trim,
)


class TestFindChar:
    def test_first_occurrence(self):
        text = "hello world"
        index = find_char(text, "o")
        assert text[index] == "o"
        assert "o" not in text[:index]

    def test_missing(self):
        assert find_char("hello", "z") is None

    def test_terminator_gives_length(self):
        assert find_char("hello", "\0") == len("hello")
        assert find_char("hello", 0) == len("hello")

    def test_int_argument_narrowed_to_byte(self):
        assert find_char("abc", ord("b") + 256) == find_char("abc", "b")

    def test_rejects_long_string(self):
        with pytest.raises(ValueError):
            find_char("abc", "ab")


class TestFindLastChar:
    def test_last_occurrence(self):
        text = "hello world"
        index = find_last_char(text, "o")
        assert text[index] == "o"
        assert "o" not in text[index + 1:]

    def test_missing(self):
        assert find_last_char("hello", "q") is None

    def test_terminator_gives_length(self):
        assert find_last_char("abc", "\0") == len("abc")

    def test_single_occurrence_agrees_with_forward_search(self):
        assert find_last_char("abcdef", "d") == find_char("abcdef", "d")


class TestCompare:
    def test_equal(self):
        assert compare("abc", "abc") == 0

    def test_difference_of_codes(self):
        assert compare("abc", "abd") == ord("c") - ord("d")

    def test_prefix_is_smaller(self):
        assert compare("ab", "abc") == -ord("c")
        assert compare("abc", "ab") == ord("c")

    def test_antisymmetric(self):
        for a, b in [("apple", "apricot"), ("x", ""), ("", "")]:
            assert compare(a, b) == -compare(b, a)


class TestCompareN:
    def test_zero_length_is_equal(self):
        assert compare_n("abc", "xyz", 0) == 0

    def test_only_prefix_considered(self):
        assert compare_n("abcX", "abcY", 3) == 0
        assert compare_n("abcX", "abcY", 4) == ord("X") - ord("Y")

    def test_shorter_string(self):
        assert compare_n("ab", "abc", 5) < 0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            compare_n("a", "b", -1)


class TestFindIn:
    def test_found_within_bound(self):
        haystack = "foo bar baz"
        index = find_in(haystack, "bar", len(haystack))
        assert haystack[index:index + 3] == "bar"

    def test_match_must_fit_within_bound(self):
        haystack = "foo bar baz"
        start = haystack.index("bar")
        assert find_in(haystack, "bar", start + 2) is None
        assert find_in(haystack, "bar", start + 3) == start

    def test_empty_needle(self):
        assert find_in("anything", "", 0) == 0

    def test_missing(self):
        assert find_in("abc", "zz", 3) is None


class TestSubstr:
    def test_inner_slice(self):
        assert substr("hello", 1, 3) == "ell"

    def test_clipped_at_end(self):
        assert substr("hello", 3, 100) == "lo"

    def test_start_past_end(self):
        assert substr("hello", 5, 2) == ""
        assert substr("hello", 42, 2) == ""

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            substr("hello", -1, 2)


class TestJoin:
    def test_both(self):
        assert join("foo", "bar") == "foobar"

    def test_one_missing(self):
        assert join(None, "bar") == "bar"
        assert join("foo", None) == "foo"

    def test_both_missing(self):
        assert join(None, None) is None


class TestTrim:
    def test_both_ends(self):
        assert trim("xxhixyx", "xy") == "hi"

    def test_inner_kept(self):
        assert trim("--a-b--", "-") == "a-b"

    def test_all_removed(self):
        assert trim("aaaa", "a") == ""

    def test_no_charset(self):
        assert trim("  keep  ", None) == "  keep  "

    def test_empty_charset(self):
        assert trim("  keep  ", "") == "  keep  "


class TestSplit:
    def test_runs_of_separator(self):
        assert split("  hello   world  ", " ") == ["hello", "world"]

    def test_no_separator(self):
        assert split("word", " ") == ["word"]

    def test_only_separators(self):
        assert split(",,,", ",") == []

    def test_rejoin_round_trip(self):
        words = ["ls", "-l", "-a"]
        assert split(" ".join(words), " ") == words


class TestMapIndexed:
    def test_uses_index(self):
        result = map_indexed("abcd", lambda i, c: c.upper() if i % 2 == 0 else c)
        assert result == "AbCd"

    def test_identity_round_trip(self):
        assert map_indexed("same", lambda i, c: c) == "same"


class TestIterIndexed:
    def test_replaces_in_place(self):
        chars = list("abc")
        iter_indexed(chars, lambda i, c: c.upper())
        assert "".join(chars) == "ABC"

    def test_none_keeps_item(self):
        chars = list("abc")
        seen = []
        iter_indexed(chars, lambda i, c: seen.append((i, c)))
        assert chars == ["a", "b", "c"]
        assert seen == [(0, "a"), (1, "b"), (2, "c")]


class TestStrlcpy:
    def test_fits(self):
        assert strlcpy("hello", 10) == ("hello", len("hello"))

    def test_truncated(self):
        copied, length = strlcpy("hello", 3)
        assert copied == "he"
        assert length == len("hello")

    def test_zero_size(self):
        assert strlcpy("hello", 0) == ("", len("hello"))


class TestStrlcat:
    def test_fits(self):
        text, length = strlcat("foo", "bar", 20)
        assert text == "foobar"
        assert length == len("foobar")

    def test_truncated(self):
        text, length = strlcat("foo", "bar", 5)
        assert text == "foob"
        assert length == len("foo") + len("bar")

    def test_dest_fills_buffer(self):
        text, length = strlcat("foobar", "xyz", 4)
        assert text == "foobar"
        assert length == 4 + len("xyz")

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            strlcat("a", "b", -1)