"""Pydantic models for API request bodies."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fitbot.domain.models import UserProfile

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

Gender = Literal["male", "female"]
ActivityLevelName = Literal[
    "sedentary", "lightlyActive", "moderatelyActive", "veryActive", "extremelyActive"
]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
GoalType = Literal["maintain", "lose", "gain"]


class ApiModel(BaseModel):
    """Base model accepting the client's camelCase names."""

    model_config = ConfigDict(populate_by_name=True)


class SignupRequest(ApiModel):
    """Account creation payload."""

    name: str = Field(min_length=2, max_length=50)
    email: str
    password: str = Field(min_length=8)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if len(stripped) < 2:  # noqa: PLR2004
            raise ValueError("Name must be between 2 and 50 characters")
        return stripped

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        cleaned = value.strip().lower()
        if not _EMAIL_PATTERN.match(cleaned):
            raise ValueError("Please provide a valid email")
        return cleaned

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if not (
            re.search(r"[a-z]", value)
            and re.search(r"[A-Z]", value)
            and re.search(r"\d", value)
        ):
            raise ValueError(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number"
            )
        return value


class LoginRequest(ApiModel):
    """Credentials payload."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileRequest(ApiModel):
    """Complete profile update."""

    weight: float = Field(ge=20, le=300)
    height: float = Field(ge=100, le=250)
    age: int = Field(ge=13, le=120)
    gender: Gender
    activity_level: ActivityLevelName = Field(alias="activityLevel")

    def to_profile(self) -> UserProfile:
        return UserProfile(
            weight_kg=self.weight,
            height_cm=self.height,
            age=self.age,
            gender=self.gender,
            activity_level=self.activity_level,
        )


class PartialProfile(ApiModel):
    """Profile fields a chat client may send along with a message."""

    weight: float | None = None
    height: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: str | None = Field(default=None, alias="activityLevel")

    def to_profile(self) -> UserProfile:
        return UserProfile.from_payload(self.model_dump(by_alias=True))


class ChatRequest(ApiModel):
    """Chat message payload."""

    message: str = Field(min_length=1, max_length=1000)
    user_data: PartialProfile | None = Field(default=None, alias="userData")
    use_external_ai: bool | None = Field(default=None, alias="useExternalAI")

    @field_validator("message")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Message must be between 1 and 1000 characters")
        return stripped


class FoodSearchRequest(ApiModel):
    """Food search payload; query length is checked by the catalog."""

    query: str = ""
    limit: int = Field(default=10, ge=1, le=50)


class NutritionPayload(ApiModel):
    """Client-computed nutrition for a logged serving."""

    energy: float | None = None
    protein: float | None = None
    fat: float | None = None
    carbohydrates: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    salt: float | None = None
    saturated_fat: float | None = Field(default=None, alias="saturatedFat")


class FoodLogRequest(ApiModel):
    """Food log payload.

    When ``nutrition`` is sent the entry is stored as given, otherwise the
    food is looked up by ``foodId`` and scaled to the serving.
    """

    food_id: str = Field(alias="foodId", min_length=1)
    meal_type: MealType = Field(alias="mealType")
    serving_amount: float = Field(alias="servingAmount", ge=0.1, le=10000)
    serving_unit: str = Field(default="g", alias="servingUnit", min_length=1, max_length=20)
    food_name: str | None = Field(default=None, alias="foodName", max_length=200)
    brand: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    nutrition: NutritionPayload | None = None


class NutritionGoalsRequest(ApiModel):
    """Nutrition goal payload."""

    calories: int = Field(ge=800, le=5000)
    protein: float | None = Field(default=None, ge=0, le=500)
    fat: float | None = Field(default=None, ge=0, le=300)
    carbohydrates: float | None = Field(default=None, ge=0, le=800)
    fiber: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)
    goal_type: GoalType = Field(default="maintain", alias="goalType")
    weekly_weight_goal: float = Field(default=0, alias="weeklyWeightGoal")
