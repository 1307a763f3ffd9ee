"""Free-text search and status filtering over the built model."""

from dataclasses import dataclass

from debtbook.domain.entities import ClientView

ACTIVE = "active"
OVERDUE = "overdue"
CLOSED = "closed"
ALL = "all"
STATUSES = (ACTIVE, OVERDUE, CLOSED, ALL)


def _haystack(view: ClientView) -> list[str]:
    fields = [view.name, view.client.phone, view.client.note]
    fields.extend(entry.comment for entry in view.entries)
    return [text.lower() for text in fields if text]


def filter_clients(items: list[ClientView], query: str) -> list[ClientView]:
    """Keep clients whose name, phone, note or any entry comment contains the query.

    Matching is a case-insensitive substring test on each field separately.
    A blank query returns ``items`` itself.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return items
    return [view for view in items if any(needle in text for text in _haystack(view))]


def filter_status(items: list[ClientView], status: str) -> list[ClientView]:
    """Keep clients in one status bucket.

    ``active`` is every client not archived, ``overdue`` the active ones past
    their due date, ``closed`` the archived ones and ``all`` everything.
    """
    if status not in STATUSES:
        raise ValueError(f"Status must be one of {', '.join(STATUSES)}, got {status!r}")
    if status == ALL:
        return items
    if status == CLOSED:
        return [view for view in items if view.is_archived]
    if status == OVERDUE:
        return [view for view in items if view.is_overdue]
    return [view for view in items if not view.is_archived]


@dataclass
class ViewState:
    """Search and status state owned by whoever renders the model."""

    query: str = ""
    status: str = ACTIVE

    @property
    def needs_archived(self) -> bool:
        """Whether the model must be built with archived clients included."""
        return self.status in (CLOSED, ALL)

    def apply(self, items: list[ClientView]) -> list[ClientView]:
        return filter_clients(filter_status(items, self.status), self.query)
