"""
Tests for the ModerationService.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import select, func

from conftest import make_post, make_user
from lms_admin.exceptions import InvalidStatusError, NotFoundError, ValidationError
from lms_admin.models import AuditEntry, ForumPost, PostStatus, UserRole
from lms_admin.services import audit_service
from lms_admin.services.moderation_service import (
    ModerationService,
    coerce_reason,
    parse_moderation_target,
)


def audit_count(db):
    return db.execute(
        select(func.count()).select_from(AuditEntry)
    ).scalar_one()


class TestParseModerationTarget:

    @pytest.mark.parametrize("status", ["approved", "rejected"])
    def test_accepts_targets(self, status):
        assert parse_moderation_target(status).value == status

    @pytest.mark.parametrize(
        "status", ["pending", "invalid_status", "", None, 1, {"$ne": ""}]
    )
    def test_rejects_everything_else(self, status):
        with pytest.raises(InvalidStatusError, match="Invalid status"):
            parse_moderation_target(status)


class TestCoerceReason:

    def test_string_kept(self):
        assert coerce_reason("Content is appropriate") == "Content is appropriate"

    def test_missing_reason_is_none(self):
        assert coerce_reason(None) is None
        assert coerce_reason("") is None

    def test_mapping_becomes_json_text(self):
        assert coerce_reason({"$gt": ""}) == '{"$gt": ""}'

    def test_scalars_become_text(self):
        assert coerce_reason(42) == "42"
        assert coerce_reason(["a", "b"]) == '["a", "b"]'

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError, match="500"):
            coerce_reason("x" * 501)


class TestModerate:

    def test_approve_pending_post(self, db_session, admin_user, pending_post):
        service = ModerationService(db_session)

        post = service.moderate(
            pending_post.id, "approved", "ok", actor=admin_user,
            ip_address="10.0.0.1",
        )

        assert post.status == PostStatus.APPROVED
        assert post.moderated_by == admin_user.id
        assert post.moderated_at is not None
        assert post.moderation_reason == "ok"

    def test_writes_one_audit_entry(self, db_session, admin_user, pending_post):
        service = ModerationService(db_session)
        service.moderate(
            pending_post.id, "rejected", "spam", actor=admin_user,
            ip_address="10.0.0.1",
        )

        entries = db_session.execute(select(AuditEntry)).scalars().all()
        assert len(entries) == 1
        entry = entries[0]
        assert entry.action == "moderate"
        assert entry.resource_type == "Forum"
        assert entry.resource_id == pending_post.id
        assert entry.user_id == admin_user.id
        assert "rejected" in entry.details
        assert entry.extra == {"reason": "spam"}
        assert entry.ip_address == "10.0.0.1"

    def test_no_reason_means_no_metadata(self, db_session, admin_user, pending_post):
        ModerationService(db_session).moderate(
            pending_post.id, "approved", None, actor=admin_user
        )

        entry = db_session.execute(select(AuditEntry)).scalar_one()
        assert entry.extra is None
        assert pending_post.moderation_reason is None

    def test_invalid_status_writes_nothing(self, db_session, admin_user, pending_post):
        service = ModerationService(db_session)

        with pytest.raises(InvalidStatusError):
            service.moderate(pending_post.id, "pending", None, actor=admin_user)

        db_session.refresh(pending_post)
        assert pending_post.status == PostStatus.PENDING
        assert pending_post.moderated_at is None
        assert audit_count(db_session) == 0

    def test_unknown_post_not_found(self, db_session, admin_user):
        service = ModerationService(db_session)

        with pytest.raises(NotFoundError, match="Forum post not found"):
            service.moderate(999, "approved", None, actor=admin_user)

        assert audit_count(db_session) == 0

    def test_object_reason_stored_as_string(self, db_session, admin_user, pending_post):
        post = ModerationService(db_session).moderate(
            pending_post.id, "approved", {"$gt": ""}, actor=admin_user
        )

        assert isinstance(post.moderation_reason, str)
        assert post.moderation_reason == '{"$gt": ""}'

    def test_re_moderation_overrides_earlier_decision(
        self, db_session, admin_user, pending_post
    ):
        service = ModerationService(db_session)
        service.moderate(pending_post.id, "approved", "fine", actor=admin_user)
        post = service.moderate(
            pending_post.id, "rejected", "changed my mind", actor=admin_user
        )

        assert post.status == PostStatus.REJECTED
        assert post.moderation_reason == "changed my mind"

        entries = db_session.execute(
            select(AuditEntry).order_by(AuditEntry.timestamp, AuditEntry.id)
        ).scalars().all()
        assert [e.details for e in entries] == [
            "Moderated forum post: approved",
            "Moderated forum post: rejected",
        ]
        assert entries[0].timestamp <= entries[1].timestamp

    def test_audit_failure_keeps_moderation(
        self, db_session, admin_user, pending_post, monkeypatch
    ):
        def broken_entry(**kwargs):
            raise RuntimeError("audit store unavailable")

        fake_logger = MagicMock()
        monkeypatch.setattr(audit_service, "AuditEntry", broken_entry)
        monkeypatch.setattr(audit_service, "logger", fake_logger)

        post = ModerationService(db_session).moderate(
            pending_post.id, "approved", None, actor=admin_user
        )

        assert post.status == PostStatus.APPROVED
        db_session.expire_all()
        stored = db_session.get(ForumPost, pending_post.id)
        assert stored.status == PostStatus.APPROVED
        assert audit_count(db_session) == 0
        fake_logger.error.assert_called_once()


class TestListPosts:

    def test_filters_by_status_newest_first(self, db_session, student_user):
        first = make_post(db_session, student_user, title="first")
        second = make_post(db_session, student_user, title="second")
        make_post(db_session, student_user, status=PostStatus.APPROVED)

        posts = ModerationService(db_session).list_posts("pending")

        assert [p.id for p in posts] == [second.id, first.id]

    def test_unknown_status_rejected(self, db_session):
        with pytest.raises(InvalidStatusError):
            ModerationService(db_session).list_posts("archived")


class TestDashboardStats:

    def test_counts(self, db_session, admin_user, student_user):
        make_user(db_session, "Trainer", "trainer@lms.test", UserRole.TRAINER)
        make_post(db_session, student_user)
        make_post(db_session, student_user)
        make_post(db_session, student_user, status=PostStatus.REJECTED)

        stats = ModerationService(db_session).dashboard_stats()

        assert stats.moderation.pending_forums == 2
        assert stats.users.total == 3
        assert stats.users.admins == 1
        assert stats.users.students == 1
        assert stats.users.trainers == 1
