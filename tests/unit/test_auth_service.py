"""Tests for AuthService."""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo.errors import DuplicateKeyError


def make_users_db():
    mock_db = MagicMock()
    mock_users = AsyncMock()
    mock_db.__getitem__.return_value = mock_users
    return mock_db, mock_users


@pytest.mark.asyncio
class TestAuthServiceRegister:
    """Tests for user registration."""

    async def test_register_user_success(self):
        """Test successful user registration."""
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()
        mock_users.find_one.return_value = None
        mock_users.insert_one.return_value = AsyncMock(inserted_id=ObjectId())

        service = AuthService(mock_db)
        user = await service.register_user(
            email="Learner@Example.com",
            password="securepassword123",
            name="Learner",
        )

        assert user.email == "learner@example.com"
        assert user.name == "Learner"
        assert user.id
        assert not hasattr(user, "hashed_password")

        insert_call = mock_users.insert_one.call_args[0][0]
        assert insert_call["hashed_password"].startswith("$2b$")
        assert insert_call["hashed_password"] != "securepassword123"

    async def test_register_duplicate_email(self):
        """Test registration with duplicate email fails."""
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()
        mock_users.find_one.return_value = {"_id": ObjectId(), "email": "learner@example.com"}

        service = AuthService(mock_db)

        with pytest.raises(ValueError, match="Email already registered"):
            await service.register_user(email="learner@example.com", password="password123")

        mock_users.insert_one.assert_not_called()

    async def test_register_duplicate_key_race(self):
        """Test a unique index violation is reported as a duplicate email."""
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()
        mock_users.find_one.return_value = None
        mock_users.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")

        service = AuthService(mock_db)

        with pytest.raises(ValueError, match="Email already registered"):
            await service.register_user(email="learner@example.com", password="password123")


@pytest.mark.asyncio
class TestAuthServiceLogin:
    """Tests for user login."""

    async def test_login_success(self):
        """Test successful login returns a token for the user."""
        from mern_buddy.services.auth_service import AuthService
        from mern_buddy.utils.auth import hash_password, verify_access_token

        mock_db, mock_users = make_users_db()
        user_id = ObjectId()
        mock_users.find_one.return_value = {
            "_id": user_id,
            "email": "learner@example.com",
            "hashed_password": hash_password("correctpassword"),
            "created_at": datetime.now(),
            "updated_at": datetime.now(),
        }

        service = AuthService(mock_db)
        token = await service.login(email="learner@example.com", password="correctpassword")

        assert verify_access_token(token) == str(user_id)

    async def test_login_user_not_found(self):
        """Test login with non-existent user fails."""
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()
        mock_users.find_one.return_value = None

        service = AuthService(mock_db)

        with pytest.raises(ValueError, match="Invalid email or password"):
            await service.login(email="notfound@example.com", password="password123")

    async def test_login_wrong_password(self):
        """Test login with incorrect password fails with the same message."""
        from mern_buddy.services.auth_service import AuthService
        from mern_buddy.utils.auth import hash_password

        mock_db, mock_users = make_users_db()
        mock_users.find_one.return_value = {
            "_id": ObjectId(),
            "email": "learner@example.com",
            "hashed_password": hash_password("correctpassword"),
        }

        service = AuthService(mock_db)

        with pytest.raises(ValueError, match="Invalid email or password"):
            await service.login(email="learner@example.com", password="wrongpassword")


@pytest.mark.asyncio
class TestAuthServiceGetUser:
    """Tests for getting user by ID."""

    async def test_get_user_by_id_found(self):
        """Test getting user by ID when user exists."""
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()
        user_id = ObjectId()
        mock_users.find_one.return_value = {
            "_id": user_id,
            "email": "learner@example.com",
            "name": "Learner",
            "hashed_password": "$2b$12$...",
            "created_at": datetime.now(),
            "updated_at": datetime.now(),
        }

        service = AuthService(mock_db)
        user = await service.get_user_by_id(str(user_id))

        assert user.id == str(user_id)
        assert user.email == "learner@example.com"
        mock_users.find_one.assert_called_once_with({"_id": user_id})

    async def test_get_user_by_id_not_found(self):
        """Test getting user by ID when user doesn't exist."""
        from mern_buddy.exceptions import NotFoundError
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()
        mock_users.find_one.return_value = None

        service = AuthService(mock_db)

        with pytest.raises(NotFoundError, match="User not found"):
            await service.get_user_by_id(str(ObjectId()))

    async def test_get_user_by_malformed_id(self):
        """Test a malformed ID is reported as not found without a query."""
        from mern_buddy.exceptions import NotFoundError
        from mern_buddy.services.auth_service import AuthService

        mock_db, mock_users = make_users_db()

        service = AuthService(mock_db)

        with pytest.raises(NotFoundError):
            await service.get_user_by_id("nonexistent")

        mock_users.find_one.assert_not_called()
