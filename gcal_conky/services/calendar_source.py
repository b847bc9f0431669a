"""
Google event source - GoogleCalendarClient behind the EventSource interface.

The client secret and the access token are resolved at fetch time, so a
missing or broken credential file surfaces as an EnvironmentError from
list_upcoming_events like any other fetch failure.
"""

from pathlib import Path
from typing import List, Union

from gcal_conky.environments.base import EventSource
from gcal_conky.environments.google.auth.client import GoogleAuthClient
from gcal_conky.environments.google.auth.storage import TokenStore, load_client_config
from gcal_conky.environments.google.calendar.client import GoogleCalendarClient
from gcal_conky.environments.google.calendar.schemas import CalendarEvent
from gcal_conky.services.credential_service import CredentialService


class GoogleEventSource(EventSource):
    """
    Lists upcoming events of one Google calendar.

    Attributes:
        credentials_file: OAuth client secret JSON
        token_file: Persisted token
        calendar_id: Calendar to read
        timeout: HTTP timeout in seconds
    """

    service_name = GoogleCalendarClient.service_name
    required_scopes = GoogleCalendarClient.required_scopes

    def __init__(
        self,
        credentials_file: Union[str, Path],
        token_file: Union[str, Path],
        calendar_id: str = "primary",
        timeout: float = 30.0,
    ):
        self.credentials_file = Path(credentials_file)
        self.token_file = Path(token_file)
        self.calendar_id = calendar_id
        self.timeout = timeout

    def credential_service(self) -> CredentialService:
        """
        Build the credential service from the client secret file.

        Raises:
            CredentialsError: If the client secret file is missing or invalid
        """
        auth_client = GoogleAuthClient(load_client_config(self.credentials_file), timeout=self.timeout)
        return CredentialService(auth_client, TokenStore(self.token_file))

    async def list_upcoming_events(self, max_results: int = 10) -> List[CalendarEvent]:
        access_token = await self.credential_service().get_access_token()
        client = GoogleCalendarClient(
            access_token=access_token,
            calendar_id=self.calendar_id,
            timeout=self.timeout,
        )
        return await client.list_upcoming_events(max_results=max_results)
