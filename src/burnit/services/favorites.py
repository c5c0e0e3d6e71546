"""Favorites registry: reusable food templates deduplicated by name."""

from dataclasses import dataclass, field, replace

from burnit.domain.favorites import PRESET_FAVORITES, FavoriteFood
from burnit.services.sync import SyncAdapter


@dataclass
class FavoritesRegistry:
    """User favorites merged with a read-only preset list."""

    presets: tuple[FavoriteFood, ...] = PRESET_FAVORITES
    _favorites: list[FavoriteFood] = field(default_factory=list, init=False)

    def add_favorite(self, food: FavoriteFood) -> bool:
        """Add a favorite unless the name is already taken (case-insensitive)."""
        name = food.name.casefold()
        if any(
            existing.name.casefold() == name
            for existing in (*self.presets, *self._favorites)
        ):
            return False
        self._favorites.append(
            replace(food, preset=False) if food.preset else food
        )
        return True

    def remove_favorite(self, favorite_id: str) -> bool:
        """Remove a user favorite by id. Presets are never removed."""
        for index, favorite in enumerate(self._favorites):
            if favorite.id == favorite_id:
                del self._favorites[index]
                return True
        return False

    def list_favorites(self) -> list[FavoriteFood]:
        """Return presets and user favorites sorted by name."""
        return sorted(
            (*self.presets, *self._favorites),
            key=lambda favorite: (favorite.name.casefold(), favorite.preset),
        )

    def user_favorites(self) -> list[FavoriteFood]:
        return list(self._favorites)

    def replace_favorites(self, favorites: list[FavoriteFood]) -> None:
        """Install user favorites wholesale (used by backup import)."""
        self._favorites = []
        for favorite in favorites:
            self.add_favorite(favorite)

    async def load(self, sync: SyncAdapter) -> int:
        """Merge the adapter's favorites; return how many were new."""
        added = 0
        for favorite in await sync.list_favorites():
            if self.add_favorite(favorite):
                added += 1
        return added
