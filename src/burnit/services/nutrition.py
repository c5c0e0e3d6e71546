"""Nutrition search backed by USDA FoodData Central."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from burnit.adapters.fdc_client import FdcClient
from burnit.domain.nutrition import SearchResult
from burnit.services.cache import Cache

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Searches FDC with caching and a short retry."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 15) -> list[SearchResult]:
        """Search FDC foods. A blank query returns no results."""
        cleaned = query.strip()
        if not cleaned:
            return []
        cache_key = f"fdc:search:{cleaned.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(cleaned, page_size=limit),
            action="search",
        )
        results = [_parse_food(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, results, ttl_seconds=self.search_ttl_seconds)
        _logger.debug("FDC search query=%s results=%s", cleaned, len(results))
        return results

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_food(food: dict[str, object]) -> SearchResult:
    serving_size = food.get("servingSize")
    serving = (
        f"{serving_size:g}{food.get('servingSizeUnit') or 'g'}"
        if isinstance(serving_size, int | float)
        else "100g"
    )
    macros = _extract_macros(food.get("foodNutrients") or [])
    return SearchResult(
        fdc_id=int(food["fdcId"]),
        name=str(food.get("description", "")),
        brand=food.get("brandName") or food.get("brandOwner"),
        calories=macros["calories"],
        protein=macros["protein"],
        carbs=macros["carbs"],
        fat=macros["fat"],
        serving_size=serving,
    )


def _extract_macros(food_nutrients: list[dict[str, object]]) -> dict[str, float]:
    """Pull kcal, protein, fat and carbs out of an FDC nutrient list."""
    values = dict.fromkeys(_NUTRIENT_IDS, 0.0)
    by_id = {nutrient_id: name for name, nutrient_id in _NUTRIENT_IDS.items()}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        amount = nutrient.get("value", nutrient.get("amount"))
        name = by_id.get(nutrient_id)
        if name is not None and amount is not None:
            values[name] = float(round(float(amount)))
    return values
