"""
DevConnect Backend — User Service Unit Tests
==============================================

What we test:
    ✅ A registration that loses the unique-email race → "User already exists"
    ✅ Other database failures → DatabaseError with a generic message

How:
    UserService runs against a mocked AsyncSession whose flush() raises the
    error the database would raise.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from devconnect.exceptions import DatabaseError, ValidationError
from devconnect.schemas.user import UserCreate
from devconnect.services.user_service import UserService


@pytest.fixture
def service(test_settings):
    return UserService(test_settings)


@pytest.fixture
def new_user():
    return UserCreate(name="Ada", email="ada@example.com", password="engine1")


def _no_existing_user(session):
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session.execute.return_value = result


class TestRegisterRace:

    @pytest.mark.asyncio
    async def test_unique_violation_on_flush(self, service, new_user, mock_db_session):
        # The pre-check saw no user; a concurrent request inserted the same email first
        _no_existing_user(mock_db_session)
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT INTO users", {}, Exception("duplicate key value violates unique constraint")
        )

        with pytest.raises(ValidationError) as exc_info:
            await service.register(mock_db_session, new_user)

        assert exc_info.value.message == "User already exists"
        assert exc_info.value.errors == [{"field": "email", "msg": "User already exists"}]
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_other_database_error(self, service, new_user, mock_db_session):
        _no_existing_user(mock_db_session)
        mock_db_session.flush.side_effect = OperationalError("INSERT INTO users", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await service.register(mock_db_session, new_user)

    @pytest.mark.asyncio
    async def test_existing_email_short_circuits(self, service, new_user, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = "existing-id"
        mock_db_session.execute.return_value = result

        with pytest.raises(ValidationError, match="User already exists"):
            await service.register(mock_db_session, new_user)
        mock_db_session.add.assert_not_called()
