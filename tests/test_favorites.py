"""Tests for the favorites registry."""

import asyncio

from burnit.domain.entries import FoodEntry, Persisted
from burnit.domain.favorites import (
    PRESET_FAVORITES,
    FavoriteFood,
    favorite_from_entry,
    favorite_from_search,
)
from burnit.domain.nutrition import SearchResult
from burnit.services.favorites import FavoritesRegistry
from tests.conftest import DAY, FakeSyncAdapter


def _favorite(favorite_id: str, name: str, calories: float = 100) -> FavoriteFood:
    return FavoriteFood(id=favorite_id, name=name, calories=calories)


def test_add_favorite_ignores_case_insensitive_duplicates() -> None:
    registry = FavoritesRegistry(presets=())

    assert registry.add_favorite(_favorite("a", "Greek Yogurt"))
    assert not registry.add_favorite(_favorite("b", "greek YOGURT", calories=120))

    assert [favorite.id for favorite in registry.user_favorites()] == ["a"]


def test_add_favorite_rejects_preset_names() -> None:
    registry = FavoritesRegistry()

    assert not registry.add_favorite(_favorite("x", "protein shake"))
    assert registry.user_favorites() == []


def test_list_favorites_merges_presets_sorted_by_name() -> None:
    registry = FavoritesRegistry()
    registry.add_favorite(_favorite("u1", "Banana"))

    favorites = registry.list_favorites()
    names = [favorite.name.casefold() for favorite in favorites]

    assert names == sorted(names)
    assert len(favorites) == len(PRESET_FAVORITES) + 1
    banana = next(favorite for favorite in favorites if favorite.name == "Banana")
    assert not banana.preset
    assert all(favorite.preset for favorite in favorites if favorite is not banana)


def test_remove_favorite_only_targets_user_favorites() -> None:
    registry = FavoritesRegistry()
    registry.add_favorite(_favorite("u1", "Banana"))

    assert not registry.remove_favorite("preset-12")
    assert not registry.remove_favorite("missing")
    assert registry.remove_favorite("u1")
    assert registry.user_favorites() == []
    assert len(registry.list_favorites()) == len(PRESET_FAVORITES)


def test_added_preset_flag_is_cleared() -> None:
    registry = FavoritesRegistry(presets=())

    registry.add_favorite(FavoriteFood(id="p", name="Bagel", calories=250, preset=True))

    assert registry.user_favorites()[0].preset is False


def test_load_merges_remote_favorites(sync: FakeSyncAdapter) -> None:
    sync.favorites = [_favorite("7", "Banana"), _favorite("8", "banana")]
    registry = FavoritesRegistry(presets=())

    added = asyncio.run(registry.load(sync))

    assert added == 1
    assert [favorite.name for favorite in registry.user_favorites()] == ["Banana"]


def test_favorite_builders() -> None:
    entry = FoodEntry(
        name="Egg", calories=70, day=DAY, protein=6, key=Persisted(5)
    )
    result = SearchResult(
        fdc_id=171077,
        name="Chicken breast",
        brand=None,
        calories=140,
        protein=26,
        carbs=0,
        fat=3,
        serving_size="85g",
    )

    from_entry = favorite_from_entry(entry)
    from_search = favorite_from_search(result)

    assert from_entry.id == "5"
    assert from_entry.protein == 6
    assert from_search.id == "usda-171077"
    assert from_search.usda_id == "171077"
    assert from_search.unit == "85g"
    assert from_entry.to_entry(DAY, meal_type="lunch").meal_type == "lunch"
