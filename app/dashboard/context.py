"""
Dashboard shell context.

A ShellContext is built for every dashboard request from the request's
identity and session, then passed to whatever needs it. Nothing about the
shell is kept at process level.

Tabs:
    all          "Media Dashboard"   every item
    images       "Images Gallery"    images only
    videos       "Video Library"     videos only
    collections  "Collections"       collection list, optionally one collection

Unknown tab keys fall back to "all".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from media.types import MediaKind

if TYPE_CHECKING:
    from typing import Any

    from authentication.identity import Identity

SIDEBAR_SESSION_KEY = "sidebar_collapsed"


@dataclass(frozen=True)
class Tab:
    """One dashboard tab: its header title and the kind filter it applies."""

    key: str
    title: str
    kind: MediaKind | None = None

    @property
    def upload_kind(self) -> MediaKind:
        """Kind preselected in the upload panel on this tab."""
        return self.kind or MediaKind.IMAGE


TABS = {
    "all": Tab("all", "Media Dashboard"),
    "images": Tab("images", "Images Gallery", MediaKind.IMAGE),
    "videos": Tab("videos", "Video Library", MediaKind.VIDEO),
    "collections": Tab("collections", "Collections"),
}
DEFAULT_TAB = TABS["all"]


def resolve_tab(key: str | None) -> Tab:
    return TABS.get(key or "", DEFAULT_TAB)


@dataclass
class ShellContext:
    """
    Per-request shell state.

    Attributes:
        identity: Signed-in identity.
        tab: Active tab.
        sidebar_collapsed: Whether the navigation sidebar is collapsed.
    """

    identity: Identity
    tab: Tab
    sidebar_collapsed: bool = False

    @classmethod
    def from_request(cls, request, tab_key: str | None = None) -> ShellContext:
        return cls(
            identity=request.user,
            tab=resolve_tab(tab_key),
            sidebar_collapsed=bool(request.session.get(SIDEBAR_SESSION_KEY, False)),
        )

    @property
    def display_name(self) -> str:
        return self.identity.name

    def set_sidebar(self, session: Any, collapsed: bool | None = None) -> bool:
        """Set the sidebar state, or toggle it when collapsed is None."""
        self.sidebar_collapsed = (
            not self.sidebar_collapsed if collapsed is None else collapsed
        )
        session[SIDEBAR_SESSION_KEY] = self.sidebar_collapsed
        return self.sidebar_collapsed

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": {
                "uid": self.identity.uid,
                "email": self.identity.email,
                "display_name": self.display_name,
            },
            "tab": {
                "key": self.tab.key,
                "title": self.tab.title,
                "upload_kind": self.tab.upload_kind.value,
            },
            "tabs": [{"key": tab.key, "title": tab.title} for tab in TABS.values()],
            "sidebar": {"collapsed": self.sidebar_collapsed},
        }
