"""Summary notes kept in the top-level comment of an issue or pull request."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

SUMMARY_HEADER = "\n### Summary Notes\n"

SUMMARY_FOOTER = (
    "\n\nGenerated by triagebot, see [help](https://forge.rust-lang.org/triagebot/note.html)"
    " for how to add more"
)


@dataclass(order=False)
class NoteDataEntry:
    """One note: a title, the comment it links to and who wrote it."""

    title: str
    comment_url: str
    author: str

    def to_markdown(self) -> str:
        """The list item for this note."""
        return f'\n- ["{self.title}" by @{self.author}]({self.comment_url})'


@dataclass
class NoteData:
    """All notes of an issue, keyed by the URL of the comment that made them."""

    entries_by_url: dict[str, NoteDataEntry] = field(default_factory=dict)

    def get_url_from_title(self, title: str) -> str | None:
        """The URL of the first note (in URL order) with this title."""
        return next(
            (url for url in sorted(self.entries_by_url) if self.entries_by_url[url].title == title),
            None,
        )

    def remove_by_title(self, title: str) -> NoteDataEntry | None:
        """Remove the first note with this title and return it, if there is one."""
        url = self.get_url_from_title(title)
        if url is None:
            log.debug("unable to remove entry with title %r", title)
            return None
        entry = self.entries_by_url.pop(url)
        log.debug("removed entry %r", entry)
        return entry

    def add_summary(self, comment_url: str, title: str, author: str) -> NoteDataEntry:
        """Add a note for ``comment_url``, or retitle the one already there."""
        existing = self.entries_by_url.get(comment_url)
        if existing is not None:
            existing.title = title
            return existing
        entry = NoteDataEntry(title=title, comment_url=comment_url, author=author)
        self.entries_by_url[comment_url] = entry
        return entry

    def to_markdown(self) -> str:
        """The notes section, or an empty string when there are no notes."""
        if not self.entries_by_url:
            return ""
        items = "".join(self.entries_by_url[url].to_markdown() for url in sorted(self.entries_by_url))
        return SUMMARY_HEADER + items + SUMMARY_FOOTER