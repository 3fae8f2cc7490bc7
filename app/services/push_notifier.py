"""
Push delivery through Firebase Cloud Messaging (legacy HTTP API).
Fire-and-forget: failures are logged and reported as False, never raised.
"""
import logging
from typing import Dict, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class PushNotifier:

    def __init__(self, server_key: Optional[str] = None, url: Optional[str] = None,
                 timeout: Optional[int] = None, client: Optional[httpx.Client] = None):
        self.server_key = settings.FCM_SERVER_KEY if server_key is None else server_key
        self.url = url or settings.FCM_URL
        self.timeout = timeout or settings.PUSH_TIMEOUT_SECONDS
        self.client = client

    def send(self, device_token: Optional[str], title: str, body: str,
             data: Optional[Dict[str, str]] = None) -> bool:
        if not self.server_key:
            logger.error("FCM_SERVER_KEY is not configured, push notification not sent")
            return False
        if not device_token:
            logger.warning("Empty device token, push notification not sent")
            return False

        payload = {
            'to': device_token,
            'notification': {
                'title': title,
                'body': body,
                'sound': 'default'
            },
            'data': data or {}
        }
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'key={self.server_key}'
        }
        try:
            if self.client is not None:
                response = self.client.post(self.url, json=payload, headers=headers, timeout=self.timeout)
            else:
                response = httpx.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.error(f"Push notification error for {device_token}: {str(e)}")
            return False

        if response.status_code == 200:
            logger.info(f"Push notification sent to {device_token}")
            return True
        logger.error(f"Push notification failed: {response.status_code} - {response.text}")
        return False


def get_push_notifier() -> PushNotifier:
    return PushNotifier()
