"""Tests for the pure timeline rules."""

from dataclasses import dataclass

from app.models.timeline import Timeline
from app.services.timeline_rules import (
    DEFAULT_SETTINGS,
    TimelineSettings,
    filter_visible_posts,
    is_auto_approved,
    merge_settings,
    settings_from_timeline,
)


@dataclass
class FakePost:
    id: int
    is_approved: bool


def test_defaults():
    assert DEFAULT_SETTINGS == TimelineSettings(
        is_active=False,
        require_approval=True,
        allow_public_viewing=False,
        allow_participant_posting=True,
    )


def test_settings_from_missing_timeline():
    assert settings_from_timeline(None) == DEFAULT_SETTINGS


def test_settings_from_timeline_fills_null_columns():
    timeline = Timeline(event_id="e", is_active=True, require_approval=None)

    settings = settings_from_timeline(timeline)

    assert settings.is_active is True
    assert settings.require_approval is True
    assert settings.allow_public_viewing is False
    assert settings.allow_participant_posting is True


def test_merge_resets_omitted_fields_to_default():
    current = TimelineSettings(
        is_active=True,
        require_approval=False,
        allow_public_viewing=True,
        allow_participant_posting=False,
    )

    merged = merge_settings(current, {"is_active": True})

    assert merged == TimelineSettings(is_active=True)


def test_merge_provided_values_win():
    merged = merge_settings(
        DEFAULT_SETTINGS,
        {
            "is_active": True,
            "require_approval": False,
            "allow_public_viewing": None,
            "allow_participant_posting": False,
        },
    )

    assert merged.is_active is True
    assert merged.require_approval is False
    assert merged.allow_public_viewing is False
    assert merged.allow_participant_posting is False


def test_owner_posts_always_auto_approved():
    settings = TimelineSettings(is_active=True, require_approval=True)

    assert is_auto_approved(settings, "owner", "owner") is True
    assert is_auto_approved(settings, "sailor", "owner") is False


def test_auto_approved_without_moderation():
    settings = TimelineSettings(is_active=True, require_approval=False)

    assert is_auto_approved(settings, "sailor", "owner") is True


def test_owner_sees_all_posts():
    posts = [FakePost(1, True), FakePost(2, False)]

    assert filter_visible_posts(posts, "owner", "owner") == posts


def test_others_see_approved_only():
    posts = [FakePost(1, True), FakePost(2, False), FakePost(3, True)]

    for viewer in ("sailor", None):
        visible = filter_visible_posts(posts, viewer, "owner")
        assert [p.id for p in visible] == [1, 3]
