"""Tests for change notifications"""

import pytest

from tagchip.errors.claim import TagDisabled
from tagchip.models.profile import Profile
from tagchip.models.project import ProjectType
from tagchip.notifier import ChangeEvent, ChangeNotifier, get_notifier, queue_change
from tagchip.schemas.project import ProjectCreateSchema
from tagchip.schemas.tag import ClaimRequestSchema, TagCreateSchema


class TestChangeNotifier:
    def test_project_subscription_is_scoped(self):
        notifier = ChangeNotifier()
        received = []
        notifier.on_project_tags_changed(1, received.append)

        assert notifier.publish(ChangeEvent("tags", "created", project_id=1)) == 1
        assert notifier.publish(ChangeEvent("tags", "created", project_id=2)) == 0
        assert [e.project_id for e in received] == [1]

    def test_claims_subscription_is_unscoped(self):
        notifier = ChangeNotifier()
        received = []
        notifier.on_claims_changed(received.append)

        notifier.publish(ChangeEvent("claims", "claimed", project_id=1, tag_id=1))
        notifier.publish(ChangeEvent("claims", "claimed", project_id=2, tag_id=2))
        notifier.publish(ChangeEvent("tags", "created", project_id=1, tag_id=3))
        assert [e.tag_id for e in received] == [1, 2]

    def test_unsubscribe(self):
        notifier = ChangeNotifier()
        received = []
        unsubscribe = notifier.on_project_tags_changed(1, received.append)
        unsubscribe()
        # second call is a no-op
        unsubscribe()

        assert notifier.publish(ChangeEvent("tags", "created", project_id=1)) == 0
        assert received == []

    def test_failing_subscriber_does_not_block_others(self):
        notifier = ChangeNotifier()
        received = []

        def broken(change):
            raise RuntimeError("observer is down")

        notifier.on_claims_changed(broken)
        notifier.on_claims_changed(received.append)

        assert notifier.publish(ChangeEvent("claims", "claimed", project_id=1)) == 2
        assert len(received) == 1

    def test_as_dict(self):
        change = ChangeEvent("tags", "status_changed", project_id=3, tag_id=9)
        assert change.as_dict() == {
            "topic": "tags",
            "action": "status_changed",
            "project_id": 3,
            "tag_id": 9,
        }


class TestPublishOnCommit:
    @pytest.fixture
    def received(self):
        notifier = get_notifier()
        received = []
        unsubscribe = notifier.on_claims_changed(received.append)
        yield received
        unsubscribe()

    def test_published_after_commit_only(self, session_factory, received):
        session = session_factory()
        # open the transaction the way a real write would
        session.query(Profile).count()
        queue_change(session, ChangeEvent("claims", "claimed", project_id=1, tag_id=1))
        assert received == []
        session.commit()
        assert [e.tag_id for e in received] == [1]

    def test_dropped_on_rollback(self, session_factory, received):
        session = session_factory()
        session.query(Profile).count()
        queue_change(session, ChangeEvent("claims", "claimed", project_id=1, tag_id=2))
        session.rollback()
        session.commit()
        assert received == []

    def test_service_mutations_notify_on_commit(
        self, session_factory, services, received
    ):
        project_events = []
        session = session_factory()
        svc = services(session)
        project = svc.projects.create(
            ProjectCreateSchema(
                name="notify-club",
                type=ProjectType.EXCLUSIVE_CLUB,
                destination_url="https://club.example",
            )
        )
        session.commit()
        unsubscribe = get_notifier().on_project_tags_changed(
            project.id, project_events.append
        )
        try:
            tag = svc.tags.create(
                TagCreateSchema(project_id=project.id, nfc_uid="AA:01:02:03")
            )
            profile = Profile()
            session.add(profile)
            session.flush()
            svc.claims.claim(tag.public_id, ClaimRequestSchema(profile_id=profile.id))
            # nothing leaves before commit
            assert project_events == []
            assert received == []
            session.commit()
        finally:
            unsubscribe()

        assert [e.action for e in project_events] == ["created", "claimed"]
        assert [(e.topic, e.tag_id) for e in received] == [("claims", tag.id)]

    def test_failed_claim_does_not_notify(self, session_factory, services, received):
        session = session_factory()
        svc = services(session)
        project = svc.projects.create(
            ProjectCreateSchema(name="notify-fail", type=ProjectType.EXCLUSIVE_CLUB)
        )
        tag = svc.tags.create(
            TagCreateSchema(project_id=project.id, nfc_uid="AA:01:02:04")
        )
        svc.tags.set_status(tag.id, "disabled")
        profile = Profile()
        session.add(profile)
        session.commit()
        received.clear()

        with pytest.raises(TagDisabled):
            svc.claims.claim(tag.public_id, ClaimRequestSchema(profile_id=profile.id))
        session.rollback()
        assert received == []
