from typing import Any

import structlog
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from foodgarden.core.core import Service
from foodgarden.core.modules.food.models import Food, FoodNote, apply_set, check_field_names, strip_managed_fields
from foodgarden.errors import NotFoundError, StoreError, ValidationError
from foodgarden.utils import now

logger = structlog.get_logger(__name__)


class FoodService(Service):
    """Manages food items and their notes in the `foods` collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("foods")

    async def on_start(self) -> None:
        """Create indexes for owner lookup and listing order."""
        await self._collection.create_index([("userEmail", 1)])
        await self._collection.create_index([("addedAt", 1)])

    async def list_foods(self) -> list[Food]:
        try:
            return await Food.list_cursor(self._collection.find().sort("addedAt", 1))
        except PyMongoError as e:
            logger.exception("list_foods_failed")
            raise StoreError("Failed to fetch foods") from e

    async def get_food(self, food_id: ObjectId) -> Food:
        try:
            doc = await self._collection.find_one({"_id": food_id})
        except PyMongoError as e:
            logger.exception("get_food_failed", food_id=str(food_id))
            raise StoreError("Failed to fetch food") from e
        if doc is None:
            raise NotFoundError("Food not found")
        return Food.model_validate(doc)

    async def create_food(self, fields: dict[str, Any], user_email: str) -> Food:
        """Insert a food item owned by `user_email`; client-supplied owner or id keys are ignored."""
        fields = strip_managed_fields(fields)
        check_field_names(fields, allow_paths=False)
        food = Food.model_validate({**fields, "userEmail": user_email, "addedAt": now(), "notes": []})
        try:
            await self._collection.insert_one(food.to_mongo())
        except PyMongoError as e:
            logger.exception("create_food_failed", user_email=user_email)
            raise StoreError("Failed to add food item") from e
        logger.info("food_created", food_id=str(food.id), user_email=user_email)
        return food

    async def update_food(self, food_id: ObjectId, fields: dict[str, Any]) -> Food:
        """Set the given fields, leaving every other field untouched.

        The response is the pre-image from the same atomic find-and-modify with
        the update applied locally; no second read.
        """
        update = strip_managed_fields(fields)
        if not update:
            raise ValidationError("No fields to update")
        check_field_names(update, allow_paths=True)
        try:
            before = await self._collection.find_one_and_update(
                {"_id": food_id}, {"$set": update}, return_document=ReturnDocument.BEFORE
            )
        except PyMongoError as e:
            logger.exception("update_food_failed", food_id=str(food_id))
            raise StoreError("Failed to update food item") from e
        if before is None:
            raise NotFoundError("Food item not found")
        after = apply_set(before, update)
        if after == before:
            raise NotFoundError("Food item not found or data is the same")
        logger.info("food_updated", food_id=str(food_id), fields=sorted(update))
        return Food.model_validate(after)

    async def delete_food(self, food_id: ObjectId) -> None:
        try:
            result = await self._collection.delete_one({"_id": food_id})
        except PyMongoError as e:
            logger.exception("delete_food_failed", food_id=str(food_id))
            raise StoreError("Failed to delete food item") from e
        if result.deleted_count == 0:
            raise NotFoundError("Food item not found")
        logger.info("food_deleted", food_id=str(food_id))

    async def add_note(self, food_id: ObjectId, note: str, posted_by: str) -> FoodNote:
        """Append a note to the food's notes; existing notes are never rewritten."""
        if not note.strip():
            raise ValidationError("Note is required")
        new_note = FoodNote(note=note, posted_by=posted_by, posted_at=now())
        try:
            result = await self._collection.update_one(
                {"_id": food_id}, {"$push": {"notes": new_note.model_dump(by_alias=True)}}
            )
        except PyMongoError as e:
            logger.exception("add_note_failed", food_id=str(food_id))
            raise StoreError("Failed to add note") from e
        if result.matched_count == 0:
            raise NotFoundError("Food item not found")
        logger.info("note_added", food_id=str(food_id), posted_by=posted_by)
        return new_note
