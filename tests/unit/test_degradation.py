"""
Unit tests for the degrade-on-failure helper
"""
import pytest

from roomcraft.core.exceptions import ExternalServiceError, ResponseParseError
from roomcraft.utils.degradation import Degradable, attempt


class TestAttempt:

    @pytest.mark.unit
    async def test_primary_value_is_not_degraded(self):
        async def primary():
            return [1, 2, 3]

        outcome = await attempt(primary, lambda e: [])

        assert outcome == Degradable(value=[1, 2, 3])
        assert outcome.degraded is False

    @pytest.mark.unit
    async def test_recoverable_error_uses_fallback(self):
        error = ExternalServiceError("timed out", kind="timeout")

        async def primary():
            raise error

        outcome = await attempt(primary, lambda e: ["fallback", e.kind], recover_on=(ExternalServiceError,))

        assert outcome.degraded is True
        assert outcome.error is error
        assert outcome.value == ["fallback", "timeout"]

    @pytest.mark.unit
    async def test_other_errors_propagate(self):
        async def primary():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            await attempt(primary, lambda e: [], recover_on=(ExternalServiceError, ResponseParseError))
