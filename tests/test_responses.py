"""Tests for response body assembly."""

import pytest

from odin.exceptions import InvalidQueryError, ResponseBuildError
from odin.responses import (
    RequestMethod,
    add_entry,
    build_body,
    default_meta,
    pagination_meta,
    parse_list_param,
    parse_sort,
)


class TestBuildBody:
    """Test build_body for each request method."""

    def test_get_with_list_data(self):
        body = build_body(RequestMethod.GET, {"status": "ok"}, data=[{"id": "a"}], links={"self": "/tags"})

        assert body == {"meta": {"status": "ok"}, "data": [{"id": "a"}], "links": {"self": "/tags"}}

    def test_get_defaults_to_empty_list(self):
        body = build_body(RequestMethod.GET, {"status": "ok"})

        assert body["data"] == []
        assert body["links"] == {}

    def test_post_defaults_to_empty_object(self):
        body = build_body(RequestMethod.POST, {"status": "created"})

        assert body["data"] == {}

    def test_method_given_as_string(self):
        body = build_body("PATCH", {"status": "ok"}, data={"id": "a"})

        assert body["data"] == {"id": "a"}

    def test_error_replaces_data(self):
        body = build_body(
            RequestMethod.DELETE,
            {"status": "error"},
            error={"detail": "gone", "code": "TAG_NOT_FOUND"},
        )

        assert "data" not in body
        assert body["error"] == {"detail": "gone", "code": "TAG_NOT_FOUND"}
        assert body["meta"] == {"status": "error"}

    @pytest.mark.parametrize("kind", [RequestMethod.HEAD, RequestMethod.OPTIONS])
    def test_bodiless_methods_drop_data(self, kind):
        body = build_body(kind, {"status": "ok"}, data={"id": "a"})

        assert "data" not in body
        assert body == {"meta": {"status": "ok"}, "links": {}}

    def test_empty_meta_and_links_are_accepted(self):
        body = build_body(RequestMethod.GET, default_meta(), data=[], links={})

        assert body["meta"] == {"status": "", "message": ""}

    def test_meta_must_be_an_object(self):
        with pytest.raises(ResponseBuildError):
            build_body(RequestMethod.GET, ["not", "a", "mapping"])

    def test_links_must_be_an_object(self):
        with pytest.raises(ResponseBuildError):
            build_body(RequestMethod.GET, {"status": "ok"}, links="self")

    def test_data_must_be_object_or_array(self):
        with pytest.raises(ResponseBuildError):
            build_body(RequestMethod.POST, {"status": "ok"}, data="payload")

    def test_error_must_be_an_object(self):
        with pytest.raises(ResponseBuildError):
            build_body(RequestMethod.POST, {"status": "error"}, error="boom")

    def test_data_and_error_are_exclusive(self):
        with pytest.raises(ResponseBuildError):
            build_body(RequestMethod.POST, {"status": "error"}, data={"id": "a"}, error={"detail": "x"})

    def test_unknown_method(self):
        with pytest.raises(ResponseBuildError):
            build_body("TRACE", {"status": "ok"})

    def test_body_does_not_alias_inputs(self):
        meta = {"status": "ok"}
        body = build_body(RequestMethod.GET, meta)
        body["meta"]["status"] = "changed"

        assert meta == {"status": "ok"}


class TestHelpers:
    """Test the body helper functions."""

    def test_add_entry_chains(self):
        meta = default_meta()
        add_entry(add_entry(meta, "status", "ok"), "total", 3)

        assert meta == {"status": "ok", "message": "", "total": 3}

    def test_add_entry_rejects_non_objects(self):
        with pytest.raises(ResponseBuildError):
            add_entry([], "status", "ok")

    def test_parse_list_param(self):
        assert parse_list_param("about, email ,id") == ["about", "email", "id"]
        assert parse_list_param("") == []
        assert parse_list_param(None) == []
        assert parse_list_param("a,,b") == ["a", "b"]

    def test_pagination_from_skip(self):
        meta = pagination_meta({"about": "x"}, limit=10, skip=20)

        assert meta == {"criteria": {"about": "x"}, "limit": 10, "start": 20, "end": 30, "page": 2}

    def test_pagination_page_takes_precedence(self):
        meta = pagination_meta(None, limit=5, skip=3, page=2)

        assert meta["start"] == 10
        assert meta["end"] == 15
        assert meta["page"] == 2

    def test_pagination_page_zero_falls_back_to_skip(self):
        meta = pagination_meta(None, limit=5, skip=3, page=0)

        assert meta["start"] == 3
        assert meta["end"] == 8
        assert meta["page"] == 0

    def test_parse_sort(self):
        allowed = ("about", "created_at")

        assert parse_sort("about desc, created_at", allowed) == [("about", "DESC"), ("created_at", "ASC")]
        assert parse_sort(None, allowed) == []
        assert parse_sort(" , ", allowed) == []

    @pytest.mark.parametrize("value", ["email", "about sideways", "about ASC extra"])
    def test_parse_sort_rejects_unsupported(self, value):
        with pytest.raises(InvalidQueryError):
            parse_sort(value, ("about", "created_at"))

    def test_pagination_zero_limit(self):
        meta = pagination_meta({}, limit=0)

        assert meta["page"] == 0
        assert meta["start"] == 0
