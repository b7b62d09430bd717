"""
DevConnect Backend — Profile Service Unit Tests
=================================================

What we test:
    ✅ Two first-time upserts racing on the unique user_id → DatabaseError
       asking the client to retry, never a second profile
    ✅ Upsert for a user that no longer exists → NotFoundError
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from devconnect.exceptions import DatabaseError, NotFoundError
from devconnect.models.user import User
from devconnect.schemas.profile import ProfileUpsert
from devconnect.services.profile_service import ProfileService


@pytest.fixture
def service():
    return ProfileService()


@pytest.fixture
def user():
    return User(
        id=uuid.uuid4(),
        name="Ada",
        email="ada@example.com",
        password="hashed",
        avatar=None,
        date=datetime.now(timezone.utc),
    )


@pytest.fixture
def no_profile(mock_db_session):
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    mock_db_session.execute.return_value = result
    return mock_db_session


class TestUpsertRace:

    @pytest.mark.asyncio
    async def test_concurrent_first_upsert(self, service, user, no_profile):
        no_profile.get.return_value = user
        no_profile.flush.side_effect = IntegrityError(
            "INSERT INTO profiles", {}, Exception("duplicate key value violates unique constraint")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await service.upsert(no_profile, user.id, ProfileUpsert(status="Dev", skills="go"))

        assert exc_info.value.message == "Profile was modified concurrently. Please try again."
        no_profile.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_upsert_for_deleted_user(self, service, no_profile):
        no_profile.get.return_value = None

        with pytest.raises(NotFoundError, match="User not found"):
            await service.upsert(no_profile, uuid.uuid4(), ProfileUpsert(status="Dev", skills="go"))
        no_profile.add.assert_not_called()
