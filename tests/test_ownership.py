from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from core.exceptions import NotFoundError, UnexpectedError
from core.ownership import OwnershipValidator


async def test_known_farmer_passes(farmers, farmer):
    await OwnershipValidator(farmers).ensure_farmer_exists(farmer.id)
    assert farmers.calls == 1


async def test_unknown_farmer_is_not_found(farmers):
    with pytest.raises(NotFoundError):
        await OwnershipValidator(farmers).ensure_farmer_exists(uuid4())


async def test_lookup_failure_becomes_unexpected_and_keeps_cause():
    boom = ConnectionError("mongo down")
    reader = AsyncMock()
    reader.get_by_id.side_effect = boom

    with pytest.raises(UnexpectedError) as info:
        await OwnershipValidator(reader).ensure_farmer_exists(uuid4())

    assert info.value.original is boom
    assert info.value.__cause__ is boom


async def test_not_found_raised_by_reader_is_not_masked():
    # A reader that itself reports "not found" must not be downgraded
    reader = AsyncMock()
    reader.get_by_id.side_effect = NotFoundError("Farmer not found")

    with pytest.raises(NotFoundError):
        await OwnershipValidator(reader).ensure_farmer_exists(uuid4())
