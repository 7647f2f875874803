"""Tests for GalleryViewModel: loading states, filtering, refresh ordering, delete."""
import asyncio
import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from gallery_manager.application import GalleryViewModel, ViewState
from gallery_manager.application.services import GalleryService
from gallery_manager.application.view_model import DELETE_FAILED_MESSAGE, LOAD_FAILED_MESSAGE
from gallery_manager.domain import (
    ALL_CATEGORIES,
    BackendUnavailable,
    Category,
    GalleryItem,
    GalleryUploadRequest,
    NotFound,
)
from gallery_manager.infrastructure import GalleryBackend
from gallery_manager.infrastructure.repositories import JsonGalleryRepository


def _item(item_id, category=Category.EVENTS):
    now = datetime.now(timezone.utc)
    return GalleryItem(
        id=item_id, title=item_id, category=category,
        image_url=f"/uploads/{item_id}.jpg", created_at=now, updated_at=now,
    )


@pytest.fixture
def mock_service():
    service = Mock()
    service.list_items = AsyncMock(return_value=[])
    service.delete_item = AsyncMock()
    return service


@pytest.fixture
def view_model(mock_service):
    return GalleryViewModel(mock_service)


class TestRefresh:

    def test_starts_idle(self, view_model):
        assert view_model.state == ViewState.IDLE
        assert view_model.category == ALL_CATEGORIES
        assert view_model.total_images == 0

    @pytest.mark.asyncio
    async def test_loads_items(self, view_model, mock_service):
        mock_service.list_items.return_value = [_item("a"), _item("b")]

        assert await view_model.refresh() is True

        assert view_model.state == ViewState.LOADED
        assert view_model.total_images == 2
        mock_service.list_items.assert_awaited_once_with(ALL_CATEGORIES)

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_list(self, view_model, mock_service):
        mock_service.list_items.return_value = [_item("a")]
        await view_model.refresh()
        mock_service.list_items.side_effect = BackendUnavailable("offline")

        assert await view_model.refresh() is False

        assert view_model.state == ViewState.ERROR
        assert view_model.error == LOAD_FAILED_MESSAGE
        assert [i.id for i in view_model.items] == ["a"]

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, view_model, mock_service):
        # Arrange: the first request resolves only after the second one
        release_first = asyncio.Event()
        calls = []

        async def list_items(category):
            calls.append(category)
            if len(calls) == 1:
                await release_first.wait()
                return [_item("stale")]
            return [_item("fresh", Category.TEAM)]
        mock_service.list_items.side_effect = list_items

        # Act
        first = asyncio.create_task(view_model.refresh())
        await asyncio.sleep(0)
        await view_model.set_category(Category.TEAM)
        release_first.set()
        applied = await first

        # Assert
        assert applied is False
        assert view_model.state == ViewState.LOADED
        assert [i.id for i in view_model.items] == ["fresh"]

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self, view_model, mock_service):
        release_first = asyncio.Event()

        async def list_items(category):
            if category == ALL_CATEGORIES:
                await release_first.wait()
                raise BackendUnavailable("timeout")
            return [_item("h", Category.HEALTHCARE)]
        mock_service.list_items.side_effect = list_items

        first = asyncio.create_task(view_model.refresh())
        await asyncio.sleep(0)
        await view_model.set_category(Category.HEALTHCARE)
        release_first.set()
        await first

        assert view_model.state == ViewState.LOADED
        assert view_model.error is None

    @pytest.mark.asyncio
    async def test_corrupt_stored_record_shows_error(self, tmp_path, local_assets):
        (tmp_path / "gallery.json").write_text(json.dumps([{
            "id": "x", "title": "x", "category": "Sports", "image_url": "/uploads/x.jpg",
            "created_at": "2024-01-01T00:00:00+00:00", "updated_at": "2024-01-01T00:00:00+00:00",
        }]))
        store = JsonGalleryRepository(tmp_path / "gallery.json")
        view_model = GalleryViewModel(GalleryService(GalleryBackend(store, local_assets)))

        assert await view_model.refresh() is False
        assert view_model.state == ViewState.ERROR
        assert view_model.error == LOAD_FAILED_MESSAGE


class TestCategoryFilter:

    @pytest.mark.asyncio
    async def test_switch_to_healthcare_without_leakage(self, gallery_service):
        # Real service: one item in each of two categories
        for category in (Category.EVENTS, Category.HEALTHCARE):
            await gallery_service.create_item(GalleryUploadRequest(
                title=category.value, category=category, filename="x.jpg",
                content_type="image/jpeg", content=b"jpeg",
            ))
        view_model = GalleryViewModel(gallery_service)
        await view_model.refresh()
        assert view_model.total_images == 2

        await view_model.set_category(Category.HEALTHCARE)

        assert view_model.state == ViewState.LOADED
        assert [i.category for i in view_model.items] == [Category.HEALTHCARE]

    @pytest.mark.asyncio
    async def test_filter_change_issues_new_query_and_clears_error(self, view_model, mock_service):
        mock_service.list_items.side_effect = BackendUnavailable("offline")
        await view_model.refresh()
        assert view_model.state == ViewState.ERROR
        mock_service.list_items.side_effect = None
        mock_service.list_items.return_value = []

        await view_model.set_category("Healthcare")

        mock_service.list_items.assert_awaited_with("Healthcare")
        assert view_model.error is None
        assert view_model.state == ViewState.LOADED


class TestDelete:

    @pytest_asyncio.fixture
    async def loaded(self, view_model, mock_service):
        mock_service.list_items.return_value = [_item("a"), _item("b")]
        await view_model.refresh()
        return view_model

    @pytest.mark.asyncio
    async def test_declined_does_nothing(self, loaded, mock_service):
        assert await loaded.request_delete("a", lambda item: False) is False

        mock_service.delete_item.assert_not_called()
        assert loaded.total_images == 2

    @pytest.mark.asyncio
    async def test_confirmed_removes_locally_without_refetch(self, loaded, mock_service):
        confirm = Mock(return_value=True)

        assert await loaded.request_delete("a", confirm) is True

        confirm.assert_called_once()
        assert confirm.call_args.args[0].id == "a"
        mock_service.delete_item.assert_awaited_once_with("a")
        assert mock_service.list_items.await_count == 1
        assert [i.id for i in loaded.items] == ["b"]

    @pytest.mark.asyncio
    async def test_async_confirm(self, loaded, mock_service):
        async def confirm(item):
            return True

        assert await loaded.request_delete("b", confirm) is True
        assert [i.id for i in loaded.items] == ["a"]

    @pytest.mark.asyncio
    async def test_failure_keeps_list_and_sets_notice(self, loaded, mock_service):
        mock_service.delete_item.side_effect = NotFound("a")

        assert await loaded.request_delete("a", lambda item: True) is False

        assert loaded.notice == DELETE_FAILED_MESSAGE
        assert loaded.total_images == 2
        assert loaded.state == ViewState.LOADED

        loaded.dismiss_notice()
        assert loaded.notice is None

    @pytest.mark.asyncio
    async def test_unknown_item(self, loaded, mock_service):
        confirm = Mock(return_value=True)

        assert await loaded.request_delete("zzz", confirm) is False

        confirm.assert_not_called()
        mock_service.delete_item.assert_not_called()
