"""Utility for resolving client names to IDs."""

from debtbook.domain.client import ClientService
from debtbook.domain.errors import NotFoundError, ValidationError


def resolve_client(client_service: ClientService, client: str) -> str:
    """Resolve client name or ID to client ID.

    Args:
        client_service: ClientService instance
        client: Client ID or exact client name (case-insensitive)

    Returns:
        Client ID

    Raises:
        NotFoundError: If no client matches
        ValidationError: If the name matches more than one client
    """
    if client_service.get_client(client) is not None:
        return client

    wanted = client.strip().casefold()
    matches = [
        c for c in client_service.list_clients(include_archived=True) if c.name.casefold() == wanted
    ]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        raise ValidationError(
            f"Client name '{client}' is ambiguous ({len(matches)} matches); use the client ID"
        )
    raise NotFoundError(f"Client '{client}' not found")
