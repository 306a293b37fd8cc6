from uuid import UUID, uuid4
from typing import List, Optional

from sqlalchemy.orm import Session
from moodjournal.auth.models import User
from moodjournal.profiles.models import UserHabit, UserInterest
from moodjournal.profiles.schemas import HabitCreate, OnboardingRequest, ProfileUpdate


# Profile
def get_profile(db: Session, user_id: UUID) -> Optional[User]:
    """
    Retrieves the profile row for a user.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.

    Returns:
        Optional[User]: The profile if found, else None.
    """
    return db.query(User).filter(User.id == user_id).first()


def update_profile(db: Session, user_id: UUID, updated: ProfileUpdate) -> Optional[User]:
    """
    Updates the display name and/or journaling goals of a user.

    Returns:
        Optional[User]: The updated profile or None if not found.
    """
    profile = get_profile(db, user_id)
    if profile:
        update_data = updated.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(profile, field, value)
        db.commit()
        db.refresh(profile)
        return profile
    return None


# Interests
def get_user_interests(db: Session, user_id: UUID) -> List[UserInterest]:
    return db.query(UserInterest).filter(UserInterest.user_id == user_id).all()


def add_interest(db: Session, user_id: UUID, interest: str) -> UserInterest:
    row = UserInterest(id=uuid4(), user_id=user_id, interest=interest.strip())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_interest(db: Session, interest_id: UUID, user_id: UUID) -> Optional[UserInterest]:
    row = db.query(UserInterest).filter(
        UserInterest.id == interest_id,
        UserInterest.user_id == user_id
    ).first()
    if row:
        db.delete(row)
        db.commit()
        return row
    return None


# Habits
def get_user_habits(db: Session, user_id: UUID) -> List[UserHabit]:
    return db.query(UserHabit).filter(UserHabit.user_id == user_id).all()


def add_habit(db: Session, user_id: UUID, habit: HabitCreate) -> UserHabit:
    row = UserHabit(
        id=uuid4(),
        user_id=user_id,
        description=habit.description.strip(),
        habit_type=habit.habit_type,
        time_preference=habit.time_preference,
        location_preference=habit.location_preference,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_habit(db: Session, habit_id: UUID, user_id: UUID) -> Optional[UserHabit]:
    row = db.query(UserHabit).filter(
        UserHabit.id == habit_id,
        UserHabit.user_id == user_id
    ).first()
    if row:
        db.delete(row)
        db.commit()
        return row
    return None


# Onboarding
def complete_onboarding(db: Session, user_id: UUID, data: OnboardingRequest) -> Optional[User]:
    """
    Stores everything collected by the onboarding wizard in one transaction and
    marks the profile as onboarded. Habits chosen during onboarding are comfort
    habits and share the wizard's time/location preference.

    Returns:
        Optional[User]: The updated profile or None if the user does not exist.
    """
    profile = get_profile(db, user_id)
    if profile is None:
        return None

    profile.name = data.name.strip()
    profile.onboarding_completed = True

    for interest in data.interests:
        if interest.strip():
            db.add(UserInterest(id=uuid4(), user_id=user_id, interest=interest.strip()))

    for description in data.habits:
        if description.strip():
            db.add(
                UserHabit(
                    id=uuid4(),
                    user_id=user_id,
                    description=description.strip(),
                    habit_type="comfort",
                    time_preference=data.time_preference,
                    location_preference=data.location_preference,
                )
            )

    db.commit()
    db.refresh(profile)
    return profile
