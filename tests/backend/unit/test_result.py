"""
Unit tests for services.result module.
"""
from fakeso.services.result import CONFLICT, MECHANICAL, NOT_FOUND, Result


class TestResult:

    def test_success_envelope(self):
        result = Result.success({"emailRecipient": "a@example.com"})
        assert result.ok is True
        assert result.to_response() == {"success": True, "data": {"emailRecipient": "a@example.com"}}

    def test_success_envelope_uses_serializer(self):
        result = Result.success(3)
        assert result.to_response(lambda n: n * 2) == {"success": True, "data": 6}

    def test_failure_envelope(self):
        result = Result.failure(NOT_FOUND, "Username does not exist")
        assert result.ok is False
        assert result.data is None
        assert result.to_response() == {
            "success": False,
            "error": {"code": "NOT_FOUND", "message": "Username does not exist"},
        }

    def test_failure_serializer_not_called(self):
        def _boom(_):
            raise AssertionError("serializer must not run for failures")

        result = Result.failure(MECHANICAL, "Error logging in user")
        assert result.to_response(_boom)["error"]["code"] == "MECHANICAL"

    def test_failure_code_is_upper_kind(self):
        assert Result.failure(CONFLICT, "x").error.code == "CONFLICT"
