"""
Unit tests for FavoriteService (sync_favorites / get_favorites).
"""

import pytest

from enums.product_size import FAVORITE_SIZE_LABEL
from exceptions import AuthError
from models.payload import FavoriteSyncItem
from services.favorite import FavoriteService


def favorites(*names):
    return [FavoriteSyncItem(name=name) for name in names]


class TestSyncFavorites:

    @pytest.mark.asyncio
    async def test_guest_rejected(self, test_session, products):
        with pytest.raises(AuthError):
            await FavoriteService.sync_favorites(None, favorites("Denim Jacket"), test_session)

    @pytest.mark.asyncio
    async def test_unknown_dropped_and_duplicates_stored_once(self, test_session_maker, products, user):
        items = favorites("Denim Jacket", "Discontinued Hat", "Denim Jacket", "", "Wool Beanie")
        async with test_session_maker() as session:
            assert await FavoriteService.sync_favorites(user, items, session) == 2

    @pytest.mark.asyncio
    async def test_sync_replaces_previous_favorites(self, test_session_maker, products, user):
        async with test_session_maker() as session:
            await FavoriteService.sync_favorites(user, favorites("Denim Jacket", "Wool Beanie"), session)
        async with test_session_maker() as session:
            await FavoriteService.sync_favorites(user, favorites("Classic White Tee"), session)

        async with test_session_maker() as session:
            entries = await FavoriteService.get_favorites(user, session)
        assert [entry.name for entry in entries] == ["Classic White Tee"]


class TestGetFavorites:

    @pytest.mark.asyncio
    async def test_guest_gets_empty_list(self, test_session, products):
        assert await FavoriteService.get_favorites(None, test_session) == []

    @pytest.mark.asyncio
    async def test_entries_carry_one_size_label(self, test_session_maker, products, user):
        async with test_session_maker() as session:
            await FavoriteService.sync_favorites(user, favorites("Wool Beanie"), session)

        async with test_session_maker() as session:
            entries = await FavoriteService.get_favorites(user, session)

        assert [entry.model_dump() for entry in entries] == [{
            "id": products["Wool Beanie"].id,
            "name": "Wool Beanie",
            "price": 14.5,
            "image": "",
            "size": FAVORITE_SIZE_LABEL,
        }]
