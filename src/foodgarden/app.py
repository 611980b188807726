from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any

from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase

from foodgarden.config import Config
from foodgarden.core.core import Core
from foodgarden.core.modules.food.models import Food, FoodNote
from foodgarden.core.modules.session.models import AuthContext, AuthResult, AuthToken


class App:
    """Facade for all application operations, checks authentication before delegating to Core."""

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    @property
    def token_lifetime(self) -> timedelta:
        return self._core.services.session.token_lifetime

    def issue_token(self, email: str | None) -> AuthToken:
        """Sign a session credential for the given email (login)."""
        return self._core.services.session.issue(email)

    def authorize(self, token: str | None) -> AuthResult:
        """Run the access gate on a presented credential."""
        return self._core.services.session.authorize(token)

    async def get_foods(self) -> list[Food]:
        """List all food items (public)."""
        return await self._core.services.food.list_foods()

    async def get_food(self, food_id: ObjectId) -> Food:
        """Get a single food item (public)."""
        return await self._core.services.food.get_food(food_id)

    async def create_food(self, auth: AuthContext, fields: dict[str, Any]) -> Food:
        """Create a food item owned by the authenticated user."""
        claims = await self._core.services.access.ensure_authenticated(auth)
        return await self._core.services.food.create_food(fields, claims.email)

    async def update_food(self, auth: AuthContext, food_id: ObjectId, fields: dict[str, Any]) -> Food:
        """Partially update a food item (authenticated only)."""
        await self._core.services.access.ensure_authenticated(auth)
        return await self._core.services.food.update_food(food_id, fields)

    async def delete_food(self, auth: AuthContext, food_id: ObjectId) -> None:
        """Delete a food item (authenticated only)."""
        await self._core.services.access.ensure_authenticated(auth)
        await self._core.services.food.delete_food(food_id)

    async def add_note(self, auth: AuthContext, food_id: ObjectId, note: str) -> FoodNote:
        """Append a note to a food item, posted by the authenticated user."""
        claims = await self._core.services.access.ensure_authenticated(auth)
        return await self._core.services.food.add_note(food_id, note, claims.email)
