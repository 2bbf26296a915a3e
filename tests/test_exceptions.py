"""
ScanGate — Exception Hierarchy Tests
======================================
"""

from scangate.exceptions import ScanFailedError, ScanGateError


class TestScanFailedError:

    def test_table_added_to_context(self):
        exc = ScanFailedError(
            table_name="test-table",
            message="nope",
            context={"error_code": "AccessDeniedException"},
        )

        assert exc.context == {"error_code": "AccessDeniedException", "table": "test-table"}
        assert isinstance(exc, ScanGateError)

    def test_callers_context_left_untouched(self):
        shared = {"error_type": "RuntimeError"}

        first = ScanFailedError(table_name="orders", message="a", context=shared)
        second = ScanFailedError(table_name="users", message="b", context=shared)

        assert shared == {"error_type": "RuntimeError"}
        assert first.context["table"] == "orders"
        assert second.context["table"] == "users"

    def test_context_optional(self):
        exc = ScanFailedError(table_name="test-table", message="nope")

        assert exc.context == {"table": "test-table"}
        assert str(exc) == "nope"
