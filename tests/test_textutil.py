import pytest

from tagcommon.textutil import (
    StringFeeder,
    ascii_lower,
    ascii_upper,
    diff_index,
    expand_envs,
    index_of,
    last_index_of,
    lstrip,
    matches_any,
    replace,
    replace_many,
    rstrip,
    split,
    split_spaces,
    starts_with_any,
    substring,
    trim,
)


def test_split_documented_example():
    assert split("this is a haystack", " ") == ["this", "is", "a", "haystack"]


def test_split_drops_empty_parts():
    assert split(",,a,,b,", ",") == ["a", "b"]


def test_split_all_delimiters_is_empty():
    assert split("::::", "::") == []


def test_split_empty_delimiter_keeps_text():
    assert split("abc", "") == ["abc"]
    assert split("", "") == []


def test_split_multichar_delimiter():
    assert split("one<>two<>three", "<>") == ["one", "two", "three"]


def test_split_spaces():
    assert split_spaces("  alpha   beta gamma  ") == ["alpha", "beta", "gamma"]
    assert split_spaces("    ") == []


def test_split_spaces_keeps_tabs_inside_tokens():
    assert split_spaces("a\tb c") == ["a\tb", "c"]


def test_diff_index():
    assert diff_index("string", "strong") == 3
    assert diff_index("abc", "abcdef") == len("abc")
    assert diff_index("same", "same") == len("same")
    assert diff_index("", "x") == 0


def test_trim_family():
    text = " \t\n value \r\v\f"
    assert trim(text) == "value"
    assert lstrip(text) == "value \r\v\f"
    assert rstrip(text) == " \t\n value"


def test_trim_all_whitespace():
    assert trim("   \n") == ""


def test_index_of():
    assert index_of("haystack", "stack") == 3
    assert index_of("haystack", "needle") == -1
    assert index_of("ab", "abc") == -1
    assert index_of("abc", "") == 0


def test_last_index_of():
    assert last_index_of("abcabc", "bc") == 4
    assert last_index_of("abc", "x") == -1
    assert last_index_of("abc", "") == len("abc")


def test_ascii_case_only_touches_ascii_letters():
    assert ascii_lower("HeLLo World 123") == "hello world 123"
    assert ascii_upper("HeLLo World 123") == "HELLO WORLD 123"
    assert ascii_upper("ß") == "ß"


def test_case_round_trip():
    text = "MiXeD_case"
    assert ascii_lower(ascii_upper(text)) == ascii_lower(text)


def test_starts_with_any():
    assert starts_with_any("foobar", ["baz", "foo"])
    assert not starts_with_any("foobar", ["bar", "baz"])
    assert starts_with_any("anything", [""])
    assert not starts_with_any("anything", [])


def test_matches_any():
    assert matches_any("foo", ["bar", "foo"])
    assert not matches_any("foo", ["fo", "food"])


def test_substring_documented_examples():
    assert substring("string", 1, 3) == "tr"
    assert substring("string", 2, -1) == "ring"
    assert substring("string", 3, 3) == ""


def test_substring_default_end():
    assert substring("string", 2) == "ring"


def test_substring_bad_range():
    with pytest.raises(IndexError):
        substring("string", 4, 2)
    with pytest.raises(IndexError):
        substring("string", 0, 10)
    with pytest.raises(IndexError):
        substring("string", 7)


def test_replace_documented_examples():
    assert replace("string", "ri", "u") == "stung"
    assert replace("singing", "ing", "") == "s"
    assert replace("string", "foo", "bar") == "string"


def test_replace_empty_needle():
    assert replace("", "", "bar") == "bar"
    assert replace("string", "", "bar") == "string"


def test_replace_many_applies_in_order():
    assert replace_many("string", "ri", "u", "u", "a") == "stang"
    assert replace_many("string") == "string"


def test_replace_many_needs_pairs():
    with pytest.raises(ValueError):
        replace_many("string", "s")


def test_expand_envs():
    env = {"HOME": "/home/user", "X_1": "val"}
    assert expand_envs("$HOME/abc", env) == "/home/user/abc"
    assert expand_envs("a$X_1.b", env) == "aval.b"
    assert expand_envs("$MISSING/rest", env) == "/rest"
    assert expand_envs("plain", env) == "plain"


def test_expand_envs_uses_process_environment(monkeypatch):
    monkeypatch.setenv("TAGCOMMON_TEST_VAR", "xyz")
    assert expand_envs("<$TAGCOMMON_TEST_VAR>") == "<xyz>"


def test_feeder_line_and_column_documented():
    sf = StringFeeder("ab\nc\n")
    assert (sf.line, sf.column) == (1, 0)
    sf.next()
    assert (sf.line, sf.column) == (1, 1)
    sf.next()
    assert (sf.line, sf.column) == (1, 2)
    sf.next()
    assert (sf.line, sf.column) == (2, 0)
    sf.next()
    assert (sf.line, sf.column) == (2, 1)
    sf.next()
    assert (sf.line, sf.column) == (3, 0)
    assert not sf.has_next()


def test_feeder_next_past_end():
    sf = StringFeeder("a")
    assert sf.next() == "a"
    with pytest.raises(IndexError):
        sf.next()


def test_feeder_peek_does_not_advance():
    sf = StringFeeder("xyz")
    assert sf.peek() == "x"
    assert sf.peek() == "x"
    assert sf.peek_length(2) == "xy"
    assert sf.peek_length(10) == "xyz"
    assert sf.next() == "x"
    assert sf.column == 1


def test_feeder_peek_at_end():
    sf = StringFeeder("")
    assert sf.peek() == ""
    assert not sf.has_next()


def test_feeder_next_length_truncates():
    sf = StringFeeder("hello")
    assert sf.next_length(2) == "he"
    assert sf.next_length(10) == "llo"
    assert sf.next_length(3) == ""
    assert sf.column == len("hello")


def test_feeder_starts_with_and_require():
    sf = StringFeeder("key=value")
    assert sf.starts_with("key")
    assert not sf.starts_with("value")
    sf.require("key=")
    assert sf.starts_with("value")
    assert sf.next_length(5) == "value"


def test_feeder_require_mismatch():
    sf = StringFeeder("abc")
    with pytest.raises(ValueError):
        sf.require("abd")


def test_feeder_require_past_end():
    sf = StringFeeder("ab")
    with pytest.raises(ValueError):
        sf.require("abc")


def test_feeder_copies_text():
    source = "original"
    sf = StringFeeder(source)
    source += " changed"
    assert sf.next_length(100) == "original"