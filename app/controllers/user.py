from __future__ import annotations

from typing import Any

from app.errors import bad_request
from app.models.user import User
from app.repositories.base import Repository
from app.services.auth import AuthServices, TokenService
from app.utils.logger import setup_logger

logger = setup_logger("controllers.user")

INVALID_CREDENTIALS = "Invalid user or password"


class UserController:
    """Registration and login; not CRUD-shaped, so not a ``Controller``."""

    def __init__(
        self, repo: Repository[User], auth: AuthServices, tokens: TokenService
    ):
        self.repo = repo
        self.auth = auth
        self.tokens = tokens

    async def register(self, data: dict[str, Any]) -> User:
        data["password"] = await self.auth.hash(data["password"])
        user = await self.repo.create(data)
        logger.info(f"Registered user {user.id}")
        return user

    async def login(self, user_name: str, password: str) -> dict[str, Any]:
        """Authenticate and issue a token over ``{id, userName}``.

        An unknown user and a wrong password fail with the same error.
        """
        users = await self.repo.search("user_name", user_name)
        if not users:
            raise bad_request(INVALID_CREDENTIALS)

        user = users[0]
        if not await self.auth.compare(password, user.password):
            raise bad_request(INVALID_CREDENTIALS)

        token = self.tokens.create_jwt({"id": str(user.id), "userName": user.user_name})
        logger.info(f"User {user.id} logged in")
        return {"token": token, "user": user}
