"""Tests for in-memory add / remove / lookup."""

import pytest

from ftags.codec import decode_database, decode_tag, encode_database
from ftags.errors import MalformedRecord, MalformedTag, NotFound
from ftags.mutate import add_tags, find_record, remove_tags
from ftags.models import Scalar, Tag


def q(*texts):
    return [decode_tag(t) for t in texts]


class TestFindRecord:
    def test_first_match_wins(self):
        records = decode_database("a: x\nb: y\na: z")
        assert find_record(records, "a").tags == [Tag("x")]

    def test_missing(self):
        assert find_record(decode_database("a: x"), "b") is None


class TestAddTags:
    def test_new_path_appended_at_end(self):
        records = decode_database("b: x\na: y")
        record = add_tags(records, "c", q("t:1"))
        assert records[-1] is record
        assert encode_database(records) == "b: x\na: y\nc: t:1"

    def test_existing_record_extended_in_place(self):
        records = decode_database("a: x\nb: y")
        add_tags(records, "a", q("z", "w:[1 2]"))
        assert encode_database(records) == "a: x, z, w:[1 2]\nb: y"

    def test_present_tags_skipped(self):
        records = decode_database("a: x, v:1")
        add_tags(records, "a", q("x", "v:1", "v:2"))
        assert encode_database(records) == "a: x, v:1, v:2"

    def test_only_first_duplicate_path_changes(self):
        records = decode_database("a: x\na: y")
        add_tags(records, "a", q("z"))
        assert encode_database(records) == "a: x, z\na: y"

    def test_path_with_colon_rejected_before_change(self):
        records = decode_database("a: x")
        with pytest.raises(MalformedRecord):
            add_tags(records, "c:/dir", q("t"))
        assert encode_database(records) == "a: x"

    def test_unwritable_tag_rejected_before_change(self):
        records = decode_database("a: x")
        with pytest.raises(MalformedTag):
            add_tags(records, "a", [Tag("ok"), Tag("k", Scalar("x,y"))])
        assert encode_database(records) == "a: x"


class TestRemoveTags:
    def test_name_only_removes_every_value(self):
        records = decode_database("a: v:1, x, v:[1 2]")
        removed = remove_tags(records, "a", q("v"))
        assert [str(t) for t in removed] == ["v:1", "v:[1 2]"]
        assert encode_database(records) == "a: x"

    def test_valued_tag_removes_exact_match_only(self):
        records = decode_database("a: v:1, v:2")
        remove_tags(records, "a", q("v:2"))
        assert encode_database(records) == "a: v:1"

    def test_no_tags_removes_record(self):
        records = decode_database("a: x, y\nb: z")
        removed = remove_tags(records, "a")
        assert removed == q("x", "y")
        assert [r.path for r in records] == ["b"]

    def test_removing_last_tag_drops_record(self):
        records = decode_database("a: x\nb: z")
        remove_tags(records, "a", q("x"))
        assert [r.path for r in records] == ["b"]

    def test_all_duplicate_paths_affected(self):
        records = decode_database("a: x\nb: y\na: x, w\na: x")
        remove_tags(records, "a", q("x"))
        assert encode_database(records) == "b: y\na: w"
        assert [r.path for r in records] == ["b", "a"]

    def test_missing_path(self):
        records = decode_database("a: x")
        with pytest.raises(NotFound):
            remove_tags(records, "b", q("x"))

    def test_missing_tag(self):
        records = decode_database("a: x")
        with pytest.raises(NotFound):
            remove_tags(records, "a", q("y"))
        assert encode_database(records) == "a: x"

    def test_untagged_record_without_tags_to_remove(self):
        records = decode_database("a:\nb: y")
        with pytest.raises(NotFound, match=r"^No tags for `a`\.$"):
            remove_tags(records, "a")

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            remove_tags([], "a")
