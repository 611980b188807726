from typing import Annotated, Any

from fastapi import APIRouter, Body
from pydantic import BaseModel, Field

from foodgarden.core.db import PyObjectId
from foodgarden.core.modules.food.models import Food, FoodNote
from foodgarden.web.deps import AppDep, AuthDep
from foodgarden.web.openapi import ErrorResponse, MessageResponse

router: APIRouter = APIRouter(tags=["foods"])

FoodFields = Annotated[
    dict[str, Any],
    Body(
        description="Arbitrary food fields. Server-managed keys (id, userEmail, addedAt, notes) are ignored.",
        examples=[{"name": "Tomato", "quantity": 3, "category": "vegetable"}],
    ),
]


class CreateFoodResponse(MessageResponse):
    id: str = Field(..., description="Identifier of the created food item")


class AddNoteRequest(BaseModel):
    """Request to append a note to a food item."""

    note: str = Field(..., description="The note text")


@router.get(
    "/foods",
    summary="List foods",
    description="Get all food items. Public.",
    operation_id="listFoods",
    responses={
        200: {"description": "List of food items"},
        500: {"model": ErrorResponse, "description": "Store error"},
    },
)
async def list_foods(app: AppDep) -> list[Food]:
    return await app.get_foods()


@router.post(
    "/foods",
    summary="Create food",
    description="Create a food item owned by the authenticated user.",
    operation_id="createFood",
    status_code=201,
    responses={
        201: {"description": "Food item created"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        500: {"model": ErrorResponse, "description": "Store error"},
    },
)
async def create_food(fields: FoodFields, app: AppDep, auth: AuthDep) -> CreateFoodResponse:
    food = await app.create_food(auth, fields)
    return CreateFoodResponse(message="Food item added successfully!", id=str(food.id))


@router.get(
    "/foods/{food_id}",
    summary="Get food",
    description="Get a single food item by id. Public.",
    operation_id="getFood",
    responses={
        200: {"description": "Food item"},
        404: {"model": ErrorResponse, "description": "Food not found"},
    },
)
async def get_food(food_id: PyObjectId, app: AppDep) -> Food:
    return await app.get_food(food_id)


@router.put(
    "/foods/{food_id}",
    summary="Update food",
    description="Set the provided fields on a food item; all other fields remain unchanged.",
    operation_id="updateFood",
    responses={
        200: {"description": "Updated food item"},
        400: {"model": ErrorResponse, "description": "No updatable fields"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Food not found or data is the same"},
    },
)
async def update_food(food_id: PyObjectId, fields: FoodFields, app: AppDep, auth: AuthDep) -> Food:
    return await app.update_food(auth, food_id, fields)


@router.delete(
    "/foods/{food_id}",
    summary="Delete food",
    operation_id="deleteFood",
    responses={
        200: {"description": "Food item deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Food not found"},
    },
)
async def delete_food(food_id: PyObjectId, app: AppDep, auth: AuthDep) -> MessageResponse:
    await app.delete_food(auth, food_id)
    return MessageResponse(message="Food item deleted successfully!")


@router.post(
    "/foods/notes/{food_id}",
    summary="Add note",
    description="Append a note to a food item. The poster is the authenticated user.",
    operation_id="addFoodNote",
    status_code=201,
    responses={
        201: {"description": "Note added"},
        400: {"model": ErrorResponse, "description": "Empty note"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Food not found"},
    },
)
async def add_note(food_id: PyObjectId, request: AddNoteRequest, app: AppDep, auth: AuthDep) -> FoodNote:
    return await app.add_note(auth, food_id, request.note)
