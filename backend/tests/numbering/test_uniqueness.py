"""
Tests for UniquenessGuarantor - suffixing caller-supplied order numbers.
"""

import pytest

from order_numbering.services.numbering.exceptions import ConfigurationError, StoreError, UniquenessExhausted
from order_numbering.services.numbering.uniqueness import UniquenessGuarantor
from tests.utils.memory_store import AlwaysTakenStore, InMemoryRecordStore


class TestUniquenessGuarantor:
    """Tests for UniquenessGuarantor.ensure_unique()"""

    async def test_unused_base_is_returned_unchanged(self):
        guarantor = UniquenessGuarantor(InMemoryRecordStore(), "poid")
        assert await guarantor.ensure_unique("SO20240315001") == "SO20240315001"

    async def test_first_free_suffix_is_used(self):
        store = InMemoryRecordStore(["SO20240315001", "SO20240315001-1"])
        guarantor = UniquenessGuarantor(store, "poid")

        result = await guarantor.ensure_unique("SO20240315001")

        assert result == "SO20240315001-2"
        assert [call[2] for call in store.calls] == ["SO20240315001", "SO20240315001-1", "SO20240315001-2"]

    async def test_raises_after_max_attempts(self):
        store = AlwaysTakenStore()
        guarantor = UniquenessGuarantor(store, "poid", max_attempts=3)

        with pytest.raises(UniquenessExhausted) as exc_info:
            await guarantor.ensure_unique("SO20240315001")

        assert exc_info.value.base == "SO20240315001"
        assert exc_info.value.attempts == 3
        # Base itself plus three suffixed variants
        assert len(store.calls) == 4

    async def test_store_errors_propagate(self):
        guarantor = UniquenessGuarantor(InMemoryRecordStore(error=StoreError("Database error")), "poid")

        with pytest.raises(StoreError, match="Database error"):
            await guarantor.ensure_unique("SO20240315001")

    def test_rejects_zero_attempts(self):
        with pytest.raises(ConfigurationError):
            UniquenessGuarantor(InMemoryRecordStore(), "poid", max_attempts=0)

    def test_requires_field(self):
        with pytest.raises(ConfigurationError):
            UniquenessGuarantor(InMemoryRecordStore(), "")
