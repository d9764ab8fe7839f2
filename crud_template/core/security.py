# ==============================================================================
# SECURITY MODULE - Service API Key Authentication
# ==============================================================================
# Header-carried API key checked against a configured allow-list
# ==============================================================================

from __future__ import annotations

import hmac
import json
import logging
from typing import FrozenSet, Iterable, Optional, Union

from crud_template.core.constants import Messages
from crud_template.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class ApiKeyStrategy:
    """
    Validates a service API key against the configured key set.

    The set is loaded once, from a JSON encoded list of strings
    (the form the keys take in the environment).

    Example:
        >>> strategy = ApiKeyStrategy('["key-1", "key-2"]')
        >>> strategy.validate_api_key("key-1")
        True
    """

    def __init__(self, api_keys: Union[str, Iterable[str]]) -> None:
        """
        Initialize the strategy.

        Args:
            api_keys: JSON encoded list string, or an iterable of keys
        """
        if isinstance(api_keys, str):
            api_keys = json.loads(api_keys)
        self._api_keys: FrozenSet[str] = frozenset(api_keys)

    @property
    def api_keys(self) -> FrozenSet[str]:
        return self._api_keys

    def validate_api_key(
        self,
        api_key: Optional[str],
        request_id: Optional[str] = None,
    ) -> bool:
        """
        Accept the request if the key is in the configured set.

        Args:
            api_key: Key taken from the request header
            request_id: Correlation id for logging

        Returns:
            True when the key is accepted

        Raises:
            UnauthorizedError: If the key is missing or unknown
        """
        if api_key and any(
            hmac.compare_digest(api_key.encode(), valid_key.encode())
            for valid_key in self._api_keys
        ):
            return True

        logger.warning(
            "Rejected request with invalid service key",
            extra={"request_id": request_id},
        )
        raise UnauthorizedError(
            message=Messages.INVALID_SERVICE_KEY,
            request_id=request_id,
        )
