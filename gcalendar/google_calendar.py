"""
gcalendar/google_calendar.py
----------------------------
Thin wrapper over the Google Calendar v3 API.

Only a previously stored OAuth token is used. A server request can never
complete an interactive consent flow, so a missing or unusable token is
reported as CalendarAuthorizationError.
"""

import os
from datetime import date, timedelta
from typing import Optional

from google.auth.exceptions import GoogleAuthError, RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config import GOOGLE_CALENDAR_ID, GOOGLE_TOKEN_PATH
from utils.errors import CalendarAuthorizationError, IntegrationFailure
from utils.logger import get_logger

logger = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]


def load_credentials(token_path: str = GOOGLE_TOKEN_PATH) -> Credentials:
    """
    Load the stored user credential, refreshing it if it has expired.

    Raises:
        CalendarAuthorizationError: If no valid credential can be produced.
    """
    if not os.path.exists(token_path):
        logger.error(f"No Google token found at {token_path}; run the manual auth flow first.")
        raise CalendarAuthorizationError("No token found. Run manual auth flow.")
    try:
        creds = Credentials.from_authorized_user_file(token_path, SCOPES)
    except (ValueError, OSError) as e:
        logger.error(f"Unreadable Google token at {token_path}: {e}")
        raise CalendarAuthorizationError("Stored calendar token is invalid.") from e

    if creds.valid:
        return creds
    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except (RefreshError, GoogleAuthError) as e:
            logger.error(f"Failed to refresh Google token: {e}")
            raise CalendarAuthorizationError("Stored calendar token could not be refreshed.") from e
        with open(token_path, "w", encoding="utf-8") as f:
            f.write(creds.to_json())
        logger.info("Refreshed Google Calendar token.")
        return creds
    raise CalendarAuthorizationError("Stored calendar token is not valid.")


def _all_day_body(summary: str, description: str, day: date) -> dict:
    # the end date of an all-day event is exclusive
    return {
        "summary": summary,
        "description": description,
        "start": {"date": day.isoformat()},
        "end": {"date": (day + timedelta(days=1)).isoformat()},
    }


class GoogleCalendarClient:
    """Creates and updates all-day events in one calendar."""

    def __init__(self, credentials: Credentials, calendar_id: str = GOOGLE_CALENDAR_ID):
        self.calendar_id = calendar_id
        self._service = build("calendar", "v3", credentials=credentials, cache_discovery=False)

    @classmethod
    def from_stored_token(cls, token_path: Optional[str] = None) -> "GoogleCalendarClient":
        return cls(load_credentials(token_path or GOOGLE_TOKEN_PATH))

    def create_all_day_event(self, summary: str, description: str, day: date) -> str:
        """
        Insert an all-day event.

        Returns:
            The new event's id.

        Raises:
            IntegrationFailure: If the API call fails.
        """
        try:
            event = self._service.events().insert(
                calendarId=self.calendar_id, body=_all_day_body(summary, description, day)
            ).execute()
        except HttpError as e:
            raise IntegrationFailure(f"Google Calendar insert failed: {e}") from e
        return event["id"]

    def update_all_day_event(self, event_id: str, summary: str, description: str, day: date) -> str:
        """Overwrite an existing event in place. Returns its id."""
        try:
            event = self._service.events().update(
                calendarId=self.calendar_id,
                eventId=event_id,
                body=_all_day_body(summary, description, day),
            ).execute()
        except HttpError as e:
            if e.resp is not None and e.resp.status in (404, 410):
                logger.info(f"Event {event_id} no longer exists; creating a new one.")
                return self.create_all_day_event(summary, description, day)
            raise IntegrationFailure(f"Google Calendar update failed: {e}") from e
        return event["id"]
