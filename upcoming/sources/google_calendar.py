"""Google Calendar source — OAuth credentials and the events.list query."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from upcoming.config import CREDENTIALS_FILE, DEFAULTS, SCOPES, TOKEN_FILE
from upcoming.sources.base import EventSource

logger = logging.getLogger(__name__)


def load_credentials(
    credentials_file: Path = CREDENTIALS_FILE,
    token_file: Path = TOKEN_FILE,
) -> Credentials:
    """Return valid user credentials, running the consent flow if needed.

    A cached token is reused while valid and refreshed when expired. After a
    refresh or a fresh consent the token is written back to ``token_file``.
    """
    creds = None

    if token_file.exists():
        creds = Credentials.from_authorized_user_file(str(token_file), SCOPES)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        logger.info("Refreshing expired token from %s", token_file)
        creds.refresh(Request())
    else:
        if not credentials_file.exists():
            raise FileNotFoundError(
                f"{credentials_file} not found. Download the OAuth client secrets "
                "from Google Cloud Console and place them there, or set "
                "UPCOMING_CREDENTIALS_DIR."
            )
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_file), SCOPES)
        creds = flow.run_local_server(port=0)

    logger.info("Saving credential file to: %s", token_file)
    token_file.parent.mkdir(parents=True, exist_ok=True)
    with open(token_file, "w") as f:
        f.write(creds.to_json())
    token_file.chmod(0o600)

    return creds


class GoogleCalendarSource(EventSource):
    """Lists single (expanded) events of one calendar, ordered by start time."""

    source_name = "google_calendar"

    def __init__(
        self,
        calendar_id: str = DEFAULTS["calendar_id"],
        max_results: int = DEFAULTS["max_results"],
        service: Optional[Any] = None,
    ):
        self.calendar_id = calendar_id
        self.max_results = max_results
        self._service = service

    @property
    def service(self):
        if self._service is None:
            self._service = build("calendar", "v3", credentials=load_credentials())
        return self._service

    def fetch_events(self, window_start: datetime, window_end: datetime) -> List[Dict[str, Any]]:
        logger.debug(
            "Listing %s from %s to %s", self.calendar_id,
            window_start.isoformat(), window_end.isoformat(),
        )
        result = (
            self.service.events()
            .list(
                calendarId=self.calendar_id,
                showDeleted=False,
                singleEvents=True,
                timeMin=window_start.isoformat(),
                timeMax=window_end.isoformat(),
                maxResults=self.max_results,
                orderBy="startTime",
            )
            .execute()
        )
        events = result.get("items", [])
        logger.info("Fetched %d events from %s", len(events), self.calendar_id)
        return events
