"""
Outbound webhook client for relaying leads to n8n workflows.

One POST per call, JSON body, no retries.
"""

import logging

import requests

logger = logging.getLogger(__name__)


class WebhookDeliveryError(Exception):
    """Raised when the receiving webhook fails or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class WebhookClient:
    """POST JSON documents to caller-supplied webhook URLs."""

    def __init__(self, timeout_seconds: int = 10):
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def validate_url(url: str | None) -> str:
        """
        Check that url is an absolute http(s) URL.

        Raises:
            ValueError: If url is empty or uses another scheme
        """
        if not url:
            raise ValueError("Webhook URL is required")
        if not url.startswith(("https://", "http://")):
            raise ValueError("Webhook URL must start with http:// or https://")
        return url

    def post_json(self, url: str, payload: dict) -> None:
        """
        POST payload as JSON.

        Args:
            url: Destination webhook URL
            payload: JSON-serialisable dict

        Raises:
            ValueError: If url is invalid
            WebhookDeliveryError: On connection failure or non-2xx response
        """
        self.validate_url(url)

        try:
            response = requests.post(url, json=payload, timeout=self.timeout_seconds)
        except requests.exceptions.RequestException as e:
            logger.error(f"Webhook connection failed: {e}")
            raise WebhookDeliveryError(f"Connection failed: {e}")

        if not response.ok:
            text = response.text or "Unknown error"
            logger.error(f"Webhook returned {response.status_code}: {text}")
            raise WebhookDeliveryError(
                f"Webhook returned {response.status_code}: {text}",
                status_code=response.status_code,
            )
