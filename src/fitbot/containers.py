"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitbot.adapters.local_food_dataset import load_local_food_dataset
from fitbot.adapters.open_food_facts_client import HttpxOpenFoodFactsClient
from fitbot.adapters.openai_chat_client import OpenAIChatClient
from fitbot.adapters.supabase_chat_log_repository import SupabaseChatLogRepository
from fitbot.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from fitbot.adapters.supabase_goal_repository import SupabaseNutritionGoalRepository
from fitbot.adapters.supabase_user_repository import SupabaseUserRepository
from fitbot.config import Settings
from fitbot.domain.foods import LocalFoodDataset
from fitbot.services.auth import PasswordHasher, TokenService
from fitbot.services.chat import ChatService
from fitbot.services.external_ai import ExternalAIGateway
from fitbot.services.food_log import FoodLogService
from fitbot.services.foods import FoodCatalogService
from fitbot.services.health_check import HealthCheckService
from fitbot.services.metrics import MetricsCollector
from fitbot.services.nutrition import NutritionService
from fitbot.services.responder import RuleBasedResponder
from fitbot.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    metrics: MetricsCollector
    local_foods: LocalFoodDataset
    user_service: UserService
    chat_service: ChatService
    food_catalog: FoodCatalogService
    food_log_service: FoodLogService
    nutrition_service: NutritionService
    health_check: HealthCheckService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    metrics = MetricsCollector()
    local_foods = load_local_food_dataset(resolved_settings.local_food_csv_path)

    user_repository = SupabaseUserRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    goal_repository = SupabaseNutritionGoalRepository(supabase_client)
    chat_log_repository = SupabaseChatLogRepository(supabase_client)

    user_service = UserService(
        repository=user_repository,
        tokens=TokenService(
            secret=resolved_settings.jwt_secret,
            expires_days=resolved_settings.jwt_expires_days,
        ),
        hasher=PasswordHasher(),
        metrics=metrics,
    )
    chat_client = (
        OpenAIChatClient.create(
            api_key=resolved_settings.ai_api_key,
            base_url=resolved_settings.ai_base_url,
        )
        if resolved_settings.ai_api_key
        else None
    )
    chat_service = ChatService(
        responder=RuleBasedResponder(),
        gateway=ExternalAIGateway(
            client=chat_client,
            model=resolved_settings.ai_model,
            timeout_seconds=resolved_settings.ai_timeout_seconds,
        ),
        repository=chat_log_repository,
        metrics=metrics,
        mode=resolved_settings.chat_mode,
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
        timeout_seconds=resolved_settings.off_timeout_seconds,
    )
    food_catalog = FoodCatalogService(dataset=local_foods, remote_client=off_client)
    food_log_service = FoodLogService(
        catalog=food_catalog, repository=food_log_repository, metrics=metrics
    )
    nutrition_service = NutritionService(
        food_log_repository=food_log_repository, goal_repository=goal_repository
    )
    health_check = HealthCheckService(
        store_probe=user_repository.ping, dataset=local_foods, metrics=metrics
    )

    async def close_resources() -> None:
        await off_client.close()
        if chat_client is not None:
            await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        metrics=metrics,
        local_foods=local_foods,
        user_service=user_service,
        chat_service=chat_service,
        food_catalog=food_catalog,
        food_log_service=food_log_service,
        nutrition_service=nutrition_service,
        health_check=health_check,
        close_resources=close_resources,
    )
