from uuid import UUID
from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from moodjournal.auth.service import get_current_user_id
from moodjournal.core.database import get_db
from moodjournal.profiles.schemas import (
    HabitCreate,
    HabitOut,
    InterestCreate,
    InterestOut,
    OnboardingRequest,
    ProfileOut,
    ProfileUpdate,
)
from moodjournal.profiles.db import (
    add_habit,
    add_interest,
    complete_onboarding,
    delete_habit,
    delete_interest,
    get_profile,
    get_user_habits,
    get_user_interests,
    update_profile,
)

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=ProfileOut,
    summary="Get the current profile",
    responses={
        200: {"description": "Profile retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
    },
)
def get_profile_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> ProfileOut:
    profile = get_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put(
    "",
    response_model=ProfileOut,
    summary="Update the current profile",
    description="Update the display name and/or journaling goals used to personalize reflections.",
    responses={
        200: {"description": "Profile updated successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
        500: {"description": "Failed to update profile."},
    },
)
def update_profile_route(
    updated: ProfileUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> ProfileOut:
    try:
        profile = update_profile(db, user_id, updated)
    except Exception as e:
        logger.error(f"Error updating profile for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile")
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post(
    "/onboarding",
    response_model=ProfileOut,
    summary="Complete onboarding",
    description="Store the name, interests and comfort habits collected by the onboarding wizard.",
    responses={
        200: {"description": "Onboarding completed."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
        500: {"description": "Failed to save onboarding."},
    },
)
def onboarding_route(
    data: OnboardingRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> ProfileOut:
    try:
        profile = complete_onboarding(db, user_id, data)
    except Exception as e:
        logger.error(f"Error saving onboarding for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save onboarding")
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    logger.info(f"User {user_id} completed onboarding")
    return profile


# Interests
@router.get("/interests", response_model=List[InterestOut], summary="List interests")
def list_interests_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[InterestOut]:
    return get_user_interests(db, user_id)


@router.post(
    "/interests",
    response_model=InterestOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add an interest",
)
def add_interest_route(
    interest: InterestCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> InterestOut:
    return add_interest(db, user_id, interest.interest)


@router.delete(
    "/interests/{interest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an interest",
    responses={404: {"description": "Interest not found."}},
)
def delete_interest_route(
    interest_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    if delete_interest(db, interest_id, user_id) is None:
        raise HTTPException(status_code=404, detail="Interest not found")


# Habits
@router.get("/habits", response_model=List[HabitOut], summary="List habits")
def list_habits_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[HabitOut]:
    return get_user_habits(db, user_id)


@router.post(
    "/habits",
    response_model=HabitOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a habit",
)
def add_habit_route(
    habit: HabitCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> HabitOut:
    return add_habit(db, user_id, habit)


@router.delete(
    "/habits/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a habit",
    responses={404: {"description": "Habit not found."}},
)
def delete_habit_route(
    habit_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    if delete_habit(db, habit_id, user_id) is None:
        raise HTTPException(status_code=404, detail="Habit not found")
