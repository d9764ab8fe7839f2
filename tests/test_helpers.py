# ==============================================================================
# HELPER TESTS
# ==============================================================================
# Tests for document helpers
# ==============================================================================

from datetime import datetime

from bson import ObjectId

from crud_template.utils.helpers import (
    build_identifier_filter,
    build_set_document,
    generate_request_id,
    identifier_key,
    serialize_document,
)


class TestBuildSetDocument:
    """Tests for build_set_document."""

    def test_merges_nested_objects(self):
        existing = {"a": {"b": {"c": 1}, "d": 2}, "e": 3}
        partial = {"a": {"b": {"f": 4}}, "e": 5}

        assert build_set_document(existing, partial) == {"a.b.f": 4, "e": 5}

    def test_object_over_null_or_scalar_is_whole(self):
        existing = {"attributes": None, "status": "active"}
        partial = {"attributes": {"x": 1}, "status": {"code": 1}}

        assert build_set_document(existing, partial) == partial

    def test_leaf_values(self):
        """Lists, ids, datetimes and empty mappings are written whole."""
        oid = ObjectId()
        moment = datetime(2024, 1, 1)
        existing = {"tags": [{"x": 0}], "meta": {"k": 1}}
        partial = {"tags": [{"x": 1}], "ref": oid, "at": moment, "meta": {}}

        assert build_set_document(existing, partial) == partial

    def test_id_excluded(self):
        assert build_set_document({"_id": "a"}, {"_id": "b", "n": 1}) == {"n": 1}


class TestIdentifierKey:
    """Tests for identifier_key."""

    def test_object_id_compares_as_hex(self):
        oid = ObjectId()

        assert identifier_key(oid, "_id") == identifier_key(str(oid), "_id")

    def test_other_fields_untouched(self):
        oid = ObjectId()

        assert identifier_key(oid, "code") is oid


class TestIdentifierFilter:
    """Tests for build_identifier_filter."""

    def test_object_id_string_matches_both_forms(self):
        oid = ObjectId()

        assert build_identifier_filter(str(oid), "_id") == {
            "_id": {"$in": [oid, str(oid)]}
        }

    def test_plain_string_id(self):
        assert build_identifier_filter("tpl-1", "_id") == {"_id": "tpl-1"}

    def test_custom_field_is_literal(self):
        oid = str(ObjectId())

        assert build_identifier_filter(oid, "code") == {"code": oid}


class TestSerializeDocument:
    """Tests for serialize_document."""

    def test_converts_nested_values(self):
        oid = ObjectId()
        document = {
            "_id": oid,
            "created": datetime(2024, 5, 1, 12, 30),
            "items": [{"ref": oid}],
        }

        assert serialize_document(document) == {
            "_id": str(oid),
            "created": "2024-05-01T12:30:00",
            "items": [{"ref": str(oid)}],
        }

    def test_none_passthrough(self):
        assert serialize_document(None) is None


def test_request_ids_unique():
    assert generate_request_id() != generate_request_id()
