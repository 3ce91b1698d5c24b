"""Identity lookup backed by a mapped user table."""

from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel

from rowmap.criteria import Criteria
from rowmap.database.repository.crud import CrudHelper

U = TypeVar("U", bound=BaseModel)
U_co = TypeVar("U_co", covariant=True)


class IdentityProvider(Protocol[U_co]):
    """Finds the identity registered under an identifier."""

    def get_identity(self, identifier: str) -> U_co | None: ...


class DbUserProvider(Generic[U]):
    """Retrieve users from the database by a unique field."""

    def __init__(self, user_crud: CrudHelper[U], username_field: str) -> None:
        """Initialize provider.

        Args:
            user_crud: CRUD helper of the user type
            username_field: Column holding the identifier
        """
        self.user_crud = user_crud
        self.username_field = username_field

    def get_identity(self, identifier: str) -> U | None:
        return self.user_crud.read_one_by(Criteria({self.username_field: identifier}))
