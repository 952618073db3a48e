"""Tests for api/base.py - Unified API response format."""

from datetime import timezone

from api.base import (
    current_request_id,
    success_response,
    error_response,
    ErrorCodes,
)


class TestSuccessResponse:
    """Tests for success_response()."""

    def test_structure(self):
        resp = success_response({"foo": "bar"})
        assert resp.success is True
        assert resp.data == {"foo": "bar"}
        assert resp.error is None

    def test_request_id_generated(self):
        resp = success_response({})
        assert resp.meta.request_id is not None
        assert len(resp.meta.request_id) > 0

    def test_request_id_from_context(self):
        token = current_request_id.set("req-123")
        try:
            assert success_response({}).meta.request_id == "req-123"
        finally:
            current_request_id.reset(token)

    def test_timestamp_is_utc(self):
        resp = success_response({})
        assert resp.meta.timestamp.tzinfo == timezone.utc

    def test_json_dump_shape(self):
        body = success_response([1, 2]).model_dump(mode="json")
        assert set(body) == {"success", "data", "error", "meta"}
        assert set(body["meta"]) == {"timestamp", "request_id"}


class TestErrorResponse:
    """Tests for error_response()."""

    def test_structure(self):
        resp = error_response("TEST_ERROR", "Something went wrong")
        assert resp.success is False
        assert resp.data is None
        assert resp.error.code == "TEST_ERROR"
        assert resp.error.message == "Something went wrong"

    def test_request_id_generated(self):
        resp = error_response("ERR", "msg")
        assert resp.meta.request_id is not None
        assert len(resp.meta.request_id) > 0

    def test_timestamp_is_utc(self):
        resp = error_response("ERR", "msg")
        assert resp.meta.timestamp.tzinfo == timezone.utc


class TestErrorCodes:

    def test_has_internal_error(self):
        assert ErrorCodes.INTERNAL_ERROR == "INTERNAL_ERROR"

    def test_has_not_found(self):
        assert ErrorCodes.NOT_FOUND == "NOT_FOUND"

    def test_has_validation_error(self):
        assert ErrorCodes.VALIDATION_ERROR == "VALIDATION_ERROR"

    def test_has_invalid_request(self):
        assert ErrorCodes.INVALID_REQUEST == "INVALID_REQUEST"

    def test_has_webhook_inactive(self):
        assert ErrorCodes.WEBHOOK_INACTIVE == "WEBHOOK_INACTIVE"

    def test_has_downstream_failed(self):
        assert ErrorCodes.DOWNSTREAM_FAILED == "DOWNSTREAM_FAILED"
