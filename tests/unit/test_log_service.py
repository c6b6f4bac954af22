"""
Unit tests for LogService.
"""

from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.exceptions import ResourceNotFoundError
from lognest.core.pagination import Pagination
from lognest.db.models import Media, MediaType
from lognest.schemas.log import LogCreate, LogUpdate, MediaBase
from lognest.services.log_service import LogService
from tests.factories import CommentFactory, LogFactory, PrivateProjectFactory


def _media(*paths: str) -> list[MediaBase]:
    return [
        MediaBase(file_path=path, type=MediaType.IMAGE, sort_order=index)
        for index, path in enumerate(paths)
    ]


class TestLogService:
    """Test suite for LogService."""

    async def test_create_log_with_media(self, db_session: AsyncSession, test_project, user_id):
        """Test that a log and its media are stored together."""
        log_data = LogCreate(
            project_id=test_project.id,
            content="Day one: set up the lexer.",
            media=_media("uploads/lexer.png", "uploads/tokens.png"),
        )

        log = await LogService.create_log(db_session, log_data, user_id)

        assert log.user_profile_id == user_id
        assert log.project_id == test_project.id
        assert log.like_count == 0
        assert log.comment_count == 0
        assert [m.file_path for m in log.media] == ["uploads/lexer.png", "uploads/tokens.png"]
        assert log.comments == []

    async def test_create_log_missing_project(self, db_session: AsyncSession, user_id):
        log_data = LogCreate(project_id=uuid4(), content="Orphan log")

        with pytest.raises(ResourceNotFoundError, match="Project"):
            await LogService.create_log(db_session, log_data, user_id)

    async def test_create_log_in_someone_elses_project(
        self, db_session: AsyncSession, test_project
    ):
        log_data = LogCreate(project_id=test_project.id, content="Not my project")

        with pytest.raises(ResourceNotFoundError):
            await LogService.create_log(db_session, log_data, uuid4())

    async def test_get_log_includes_live_comments(
        self, db_session: AsyncSession, test_project, user_id
    ):
        log = LogFactory(project_id=test_project.id, user_profile_id=user_id)
        await db_session.flush()
        kept = CommentFactory(log_id=log.id, body="Nice progress")
        gone = CommentFactory(log_id=log.id, body="Deleted remark")
        gone.mark_deleted()
        await db_session.commit()

        fetched = await LogService.get_log(db_session, log.id)

        assert [c.id for c in fetched.comments] == [kept.id]

    async def test_get_log_of_private_project(self, db_session: AsyncSession, user_id):
        project = PrivateProjectFactory(user_id=user_id)
        await db_session.flush()
        log = LogFactory(project_id=project.id, user_profile_id=user_id)
        await db_session.commit()

        assert (await LogService.get_log(db_session, log.id, user_id)).id == log.id
        with pytest.raises(ResourceNotFoundError, match="Log"):
            await LogService.get_log(db_session, log.id)

    async def test_list_project_logs(self, db_session: AsyncSession, test_project, user_id):
        LogFactory.create_batch(3, project_id=test_project.id, user_profile_id=user_id)
        await db_session.commit()

        pagination = Pagination(limit=2, page=2)
        page = await LogService.list_project_logs(db_session, test_project.id, pagination)

        assert len(page) == 1
        assert pagination.total_rows == 3
        assert pagination.total_pages == 2

    async def test_list_logs_sorted_by_like_count(
        self, db_session: AsyncSession, test_project, user_id
    ):
        for likes in (3, 7, 1):
            LogFactory(project_id=test_project.id, user_profile_id=user_id, like_count=likes)
        await db_session.commit()

        page = await LogService.list_project_logs(
            db_session, test_project.id, Pagination(sort_by="like_count", sort_order="DESC")
        )

        assert [log.like_count for log in page] == [7, 3, 1]

    async def test_list_logs_of_hidden_project(self, db_session: AsyncSession):
        project = PrivateProjectFactory()
        await db_session.commit()

        with pytest.raises(ResourceNotFoundError):
            await LogService.list_project_logs(db_session, project.id, Pagination())

    async def test_update_log_replaces_media(
        self, db_session: AsyncSession, test_project, user_id
    ):
        log = await LogService.create_log(
            db_session,
            LogCreate(project_id=test_project.id, content="Draft", media=_media("a.png")),
            user_id,
        )

        updated = await LogService.update_log(
            db_session,
            log.id,
            LogUpdate(content="Final", media=_media("b.png", "c.png")),
            user_id,
        )

        assert updated.content == "Final"
        assert [m.file_path for m in updated.media] == ["b.png", "c.png"]
        stored = (
            await db_session.execute(select(Media.file_path).where(Media.log_id == log.id))
        ).scalars().all()
        assert sorted(stored) == ["b.png", "c.png"]

    async def test_update_log_content_only_keeps_media(
        self, db_session: AsyncSession, test_project, user_id
    ):
        log = await LogService.create_log(
            db_session,
            LogCreate(project_id=test_project.id, content="Draft", media=_media("a.png")),
            user_id,
        )

        updated = await LogService.update_log(
            db_session, log.id, LogUpdate(content="Edited"), user_id
        )

        assert updated.content == "Edited"
        assert [m.file_path for m in updated.media] == ["a.png"]

    async def test_update_log_by_another_user(
        self, db_session: AsyncSession, test_project, user_id
    ):
        log = LogFactory(project_id=test_project.id, user_profile_id=user_id)
        await db_session.commit()

        with pytest.raises(ResourceNotFoundError):
            await LogService.update_log(db_session, log.id, LogUpdate(content="Mine now"), uuid4())

    async def test_delete_log(self, db_session: AsyncSession, test_project, user_id):
        log = LogFactory(project_id=test_project.id, user_profile_id=user_id)
        await db_session.commit()

        await LogService.delete_log(db_session, log.id, user_id)

        with pytest.raises(ResourceNotFoundError):
            await LogService.get_log(db_session, log.id, user_id)

    async def test_delete_log_by_another_user(
        self, db_session: AsyncSession, test_project, user_id
    ):
        log = LogFactory(project_id=test_project.id, user_profile_id=user_id)
        await db_session.commit()

        with pytest.raises(ResourceNotFoundError):
            await LogService.delete_log(db_session, log.id, uuid4())
