# core/ownership.py

from uuid import UUID

from .exceptions import HttpError, NotFoundError, UnexpectedError
from .ports import FarmerReader

class OwnershipValidator:
    """Confirms that a caller identity belongs to an existing farmer."""

    def __init__(self, farmer_reader: FarmerReader):
        self.farmer_reader = farmer_reader

    async def ensure_farmer_exists(self, farmer_id: UUID) -> None:
        """
        Raises NotFoundError if the farmer is unknown.
        Lookup failures are wrapped as UnexpectedError.
        """
        try:
            farmer = await self.farmer_reader.get_by_id(farmer_id)
        except HttpError:
            raise
        except Exception as e:
            raise UnexpectedError(e) from e

        if farmer is None:
            raise NotFoundError("Farmer not found")
