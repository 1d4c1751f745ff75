"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

from fitbot.adapters.supabase_chat_log_repository import SupabaseChatLogRepository
from fitbot.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from fitbot.adapters.supabase_goal_repository import SupabaseNutritionGoalRepository
from fitbot.adapters.supabase_user_repository import SupabaseUserRepository
from fitbot.domain.chat import ChatMessage
from fitbot.domain.foods import NutritionFacts
from fitbot.domain.nutrition import DailyGoals, FoodSnapshot, NutritionGoal, ServingSize
from tests.conftest import complete_profile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_options: dict[str, object] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    executed: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload, **options) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_options = options
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.executed.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    row = {
        "id": user_id,
        "name": "Asha",
        "email": "asha@example.com",
        "password_hash": "hash",
    }
    users_table.queue("insert", [row])
    users_table.queue("select", [row])

    repository = SupabaseUserRepository(client)
    created = repository.create_user("Asha", "asha@example.com", "hash")
    fetched = repository.get_by_email("asha@example.com")

    assert str(created.id) == user_id
    assert fetched is not None
    assert fetched.profile.is_complete() is False
    assert ("email", "asha@example.com") in users_table.last_filters
    assert repository.get_by_id(uuid4()) is None


def test_supabase_user_repository_updates_profile() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = uuid4()
    users_table.queue(
        "update",
        [
            {
                "id": str(user_id),
                "name": "Asha",
                "email": "asha@example.com",
                "password_hash": "hash",
                "weight_kg": 70,
                "height_cm": 175,
                "age": 30,
                "gender": "male",
                "activity_level": "moderatelyActive",
            }
        ],
    )

    updated = SupabaseUserRepository(client).update_profile(user_id, complete_profile())

    assert updated is not None
    assert updated.profile == complete_profile()
    assert users_table.last_payload["activity_level"] == "moderatelyActive"


def test_supabase_user_repository_ping_queries_users() -> None:
    client = FakeSupabaseClient()

    SupabaseUserRepository(client).ping()

    assert client.table("users").executed == ["select"]


def test_supabase_food_log_repository() -> None:
    client = FakeSupabaseClient()
    entries_table = client.table("food_entries")
    user_id = uuid4()
    entry_id = uuid4()
    logged_at = datetime(2025, 1, 15, 12, 30, tzinfo=UTC)
    row = {
        "id": str(entry_id),
        "user_id": str(user_id),
        "logged_on": "2025-01-15",
        "logged_at": logged_at.isoformat(),
        "meal_type": "lunch",
        "food_id": "local_3",
        "food_name": "Paneer Butter Masala",
        "food_brand": "Local Database",
        "food_image_url": None,
        "nutrition": {"energy": 210, "protein": 8, "saturatedFat": None},
        "serving_amount": 100,
        "serving_unit": "g",
    }
    entries_table.queue("insert", [row])
    entries_table.queue("select", [row])
    entries_table.queue("delete", [row])

    repository = SupabaseFoodLogRepository(client)
    created = repository.create_entry(
        user_id=user_id,
        logged_at=logged_at,
        meal_type="lunch",
        food=FoodSnapshot(name="Paneer Butter Masala", food_id="local_3"),
        nutrition=NutritionFacts(energy=210, protein=8),
        serving_size=ServingSize(amount=100),
    )
    listed = repository.list_entries(user_id, date(2025, 1, 15))

    assert created.id == entry_id
    assert created.nutrition.saturated_fat == 0
    assert entries_table.last_payload["logged_on"] == "2025-01-15"
    assert entries_table.last_payload["nutrition"]["energy"] == 210
    assert listed[0].logged_at == logged_at
    assert repository.delete_entry(user_id, entry_id) is True
    assert repository.delete_entry(user_id, entry_id) is False


def test_supabase_goal_repository() -> None:
    client = FakeSupabaseClient()
    goals_table = client.table("nutrition_goals")
    user_id = uuid4()
    row = {
        "user_id": str(user_id),
        "calories": 2200,
        "protein": 150,
        "fat": None,
        "carbohydrates": None,
        "fiber": None,
        "sodium": None,
        "goal_type": "gain",
        "weekly_weight_goal": 0.25,
        "activity_level": "veryActive",
    }
    goals_table.queue("upsert", [row])
    goals_table.queue("select", [row])

    repository = SupabaseNutritionGoalRepository(client)
    saved = repository.upsert_goal(
        NutritionGoal(
            user_id=user_id,
            daily_goals=DailyGoals(calories=2200, protein=150),
            goal_type="gain",
            weekly_weight_goal=0.25,
            activity_level="veryActive",
        )
    )
    fetched = repository.get_goal(user_id)

    assert goals_table.last_options == {"on_conflict": "user_id"}
    assert saved == fetched
    assert fetched.daily_goals.fat is None
    assert fetched.is_default is False
    assert repository.get_goal(uuid4()) is None


def test_supabase_chat_log_repository() -> None:
    client = FakeSupabaseClient()
    chat_table = client.table("chat_messages")
    user_id = uuid4()
    sent_at = datetime(2025, 1, 15, 8, 0, tzinfo=UTC)
    chat_table.queue(
        "select",
        [
            {"sender": "user", "content": "hi", "created_at": sent_at.isoformat()},
            {"sender": "bot", "content": "Hello!", "created_at": sent_at.isoformat()},
        ],
    )

    repository = SupabaseChatLogRepository(client)
    repository.append_messages(
        user_id,
        [
            ChatMessage(sender="user", content="hi", timestamp=sent_at),
            ChatMessage(sender="bot", content="Hello!", timestamp=sent_at),
        ],
    )
    messages = repository.list_messages(user_id)

    assert [item["sender"] for item in chat_table.last_payload] == ["user", "bot"]
    assert [message.content for message in messages] == ["hi", "Hello!"]
    assert messages[0].timestamp == sent_at
