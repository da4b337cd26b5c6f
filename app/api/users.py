"""
app/api/users.py

Purpose: User registration endpoints

- POST /register: upsert a user by phone
- GET /users: list every user, newest first
"""

from fastapi import APIRouter, Depends
from typing import List

from app.db.mongo import MongoStore, get_store
from app.models.user import UserDocument
from app.schemas.requests import RegisterRequest
from app.schemas.response import ErrorResponse, RegisterResponse
from app.services import user_service

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def register(payload: RegisterRequest, store: MongoStore = Depends(get_store)):
    """
    Save or update a user. Registering an existing phone overwrites the name.
    """
    user = await user_service.register_user(store, payload)
    return {"success": True, "user": user}


@router.get(
    "/users",
    response_model=List[UserDocument],
    responses={500: {"model": ErrorResponse}},
)
async def list_users(store: MongoStore = Depends(get_store)):
    """Fetch all users, newest first."""
    return await user_service.list_users(store)
