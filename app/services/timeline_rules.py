"""Pure timeline rules: settings defaults/merge, auto-approval, visibility."""

from dataclasses import dataclass, fields, replace
from typing import Iterable, Protocol, TypeVar

from app.models.timeline import Timeline


@dataclass(frozen=True)
class TimelineSettings:
    """Effective timeline settings."""

    is_active: bool = False
    require_approval: bool = True
    allow_public_viewing: bool = False
    allow_participant_posting: bool = True


DEFAULT_SETTINGS = TimelineSettings()

SETTING_FIELDS = tuple(f.name for f in fields(TimelineSettings))


def settings_from_timeline(timeline: Timeline | None) -> TimelineSettings:
    """Effective settings for a stored timeline row.

    A missing row yields the defaults; a NULL column yields that field's
    default.
    """
    if timeline is None:
        return DEFAULT_SETTINGS

    values = {}
    for name in SETTING_FIELDS:
        stored = getattr(timeline, name)
        values[name] = getattr(DEFAULT_SETTINGS, name) if stored is None else stored
    return TimelineSettings(**values)


def merge_settings(
    current: TimelineSettings,
    provided: dict[str, bool | None],
) -> TimelineSettings:
    """Build the settings written by an update.

    Each provided field overwrites. An omitted (or None) field resets to the
    default, not to its value in ``current``.
    """
    values = {}
    for name in SETTING_FIELDS:
        value = provided.get(name)
        values[name] = getattr(DEFAULT_SETTINGS, name) if value is None else value
    return replace(current, **values)


def is_auto_approved(
    settings: TimelineSettings,
    author_id: str,
    owner_id: str,
) -> bool:
    """Whether a new post skips moderation.

    The event owner's posts are always approved; everyone else's depend on
    ``require_approval`` alone.
    """
    return (not settings.require_approval) or author_id == owner_id


class _HasApproval(Protocol):
    is_approved: bool


P = TypeVar("P", bound=_HasApproval)


def filter_visible_posts(
    posts: Iterable[P],
    viewer_id: str | None,
    owner_id: str,
) -> list[P]:
    """Posts the viewer may see: all for the owner, approved ones otherwise."""
    if viewer_id is not None and viewer_id == owner_id:
        return list(posts)
    return [post for post in posts if post.is_approved]
