# ==============================================================================
# SECURITY TESTS
# ==============================================================================
# Tests for the service API key strategy
# ==============================================================================

import pytest

from crud_template.core.constants import Messages
from crud_template.core.exceptions import UnauthorizedError
from crud_template.core.security import ApiKeyStrategy


class TestApiKeyStrategy:
    """Tests for ApiKeyStrategy."""

    def test_parses_json_list(self):
        """Keys are loaded from a JSON encoded list."""
        strategy = ApiKeyStrategy('["key-1", "key-2"]')

        assert strategy.api_keys == frozenset({"key-1", "key-2"})

    def test_accepts_iterable(self):
        strategy = ApiKeyStrategy(["key-1"])

        assert strategy.validate_api_key("key-1") is True

    def test_valid_key(self):
        strategy = ApiKeyStrategy('["key-1", "key-2"]')

        assert strategy.validate_api_key("key-2", request_id="r-1") is True

    @pytest.mark.parametrize("api_key", [None, "", "key-3", "KEY-1"])
    def test_invalid_key_rejected(self, api_key):
        """Missing, empty and unknown keys are unauthorized."""
        strategy = ApiKeyStrategy('["key-1"]')

        with pytest.raises(UnauthorizedError) as exc_info:
            strategy.validate_api_key(api_key, request_id="r-1")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == Messages.INVALID_SERVICE_KEY
        assert exc_info.value.request_id == "r-1"

    def test_empty_key_set_rejects_everything(self):
        strategy = ApiKeyStrategy("[]")

        with pytest.raises(UnauthorizedError):
            strategy.validate_api_key("anything")
