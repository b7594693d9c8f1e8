"""Tests for IOU access control."""

from datetime import datetime, timezone

from modules.ious.access import can_view, can_mark_repaid, is_recipient
from modules.ious.models import IOU
from modules.users.models import User

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_user(user_id: str, phone: str) -> User:
    return User(id=user_id, phone=phone, display_name=user_id, created_at=NOW)


def make_iou(**kwargs) -> IOU:
    data = {
        "id": "iou-1",
        "from_user_id": "alice",
        "share_token": "token",
        "created_at": NOW,
    }
    data.update(kwargs)
    return IOU(**data)


ALICE = make_user("alice", "5551111111")
BOB = make_user("bob", "5552222222")
CAROL = make_user("carol", "5553333333")


class TestCanView:
    def test_creator(self):
        assert can_view(ALICE, make_iou(to_user_id="bob"))

    def test_linked_recipient(self):
        assert can_view(BOB, make_iou(to_user_id="bob"))

    def test_phone_recipient_before_linking(self):
        assert can_view(BOB, make_iou(to_phone="5552222222"))

    def test_phone_match_ignored_once_linked_to_someone_else(self):
        """Once a recipient user is attached, the phone no longer grants access."""
        iou = make_iou(to_user_id="carol", to_phone="5552222222")
        assert not can_view(BOB, iou)
        assert can_view(CAROL, iou)

    def test_stranger(self):
        assert not can_view(CAROL, make_iou(to_user_id="bob"))
        assert not can_view(CAROL, make_iou(to_phone="5552222222"))

    def test_name_only_iou_is_creator_only(self):
        iou = make_iou(to_name="Bob from work")
        assert can_view(ALICE, iou)
        assert not can_view(BOB, iou)


class TestCanMarkRepaid:
    def test_same_as_view(self):
        for user in (ALICE, BOB, CAROL):
            for iou in (make_iou(to_user_id="bob"), make_iou(to_phone="5552222222"), make_iou()):
                assert can_mark_repaid(user, iou) == can_view(user, iou)


class TestIsRecipient:
    def test_creator_is_not_recipient(self):
        assert not is_recipient(ALICE, make_iou(to_user_id="bob"))
