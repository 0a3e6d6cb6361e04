"""
Owner notification channel.

``NotificationService.notify_owner`` sends a short title and a
plain‑text body to the notification endpoint configured in
``settings.notification_api_url``.  Invalid payloads and a missing
configuration are programming or deployment errors and are raised;
delivery failures (network errors, non‑2xx responses) are logged and
reported as ``False`` so callers can treat notification as best effort.
"""

import logging
from typing import Optional

import httpx

from ..core.config import settings
from ..rpc.errors import InvalidInputError


TITLE_MAX_LENGTH = 1200
CONTENT_MAX_LENGTH = 20000


def _validate_payload(title: str, content: str) -> tuple[str, str]:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title:
        raise InvalidInputError("Notification title is required.")
    if not content:
        raise InvalidInputError("Notification content is required.")
    if len(title) > TITLE_MAX_LENGTH:
        raise InvalidInputError(f"Notification title must be at most {TITLE_MAX_LENGTH} characters.")
    if len(content) > CONTENT_MAX_LENGTH:
        raise InvalidInputError(f"Notification content must be at most {CONTENT_MAX_LENGTH} characters.")
    return title, content


class NotificationService:
    """Service delivering notifications to the project owner."""

    @classmethod
    async def notify_owner(
        cls,
        title: str,
        content: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> bool:
        """Send a notification to the owner.

        Parameters
        ----------
        title : str
            Short subject line, at most 1200 characters after trimming.
        content : str
            Message body, at most 20000 characters after trimming.
        transport : Optional[httpx.AsyncBaseTransport]
            Custom transport for the HTTP client, used by tests.

        Returns
        -------
        bool
            ``True`` if the endpoint accepted the notification, ``False``
            if delivery failed.

        Raises
        ------
        InvalidInputError
            If the title or content is empty or too long.
        RuntimeError
            If the notification endpoint or API key is not configured.
        """
        logger = logging.getLogger(__name__)
        title, content = _validate_payload(title, content)
        if not settings.notification_api_url:
            raise RuntimeError("Notification service URL is not configured.")
        if not settings.notification_api_key:
            raise RuntimeError("Notification service API key is not configured.")

        headers = {
            "Authorization": f"Bearer {settings.notification_api_key}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                transport=transport,
                timeout=settings.notification_timeout_seconds,
            ) as client:
                response = await client.post(
                    settings.notification_api_url,
                    headers=headers,
                    json={"title": title, "content": content},
                )
        except httpx.HTTPError as exc:
            logger.warning("Error calling notification service: %s", exc)
            return False

        if not response.is_success:
            logger.warning(
                "Failed to notify owner (%s %s): %s",
                response.status_code,
                response.reason_phrase,
                response.text,
            )
            return False
        logger.info("Owner notified: %s", title)
        return True
