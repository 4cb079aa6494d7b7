"""Mailing-list client for the provider's hosted subscribe form."""

import logging

import httpx

from .client import Client

logger = logging.getLogger(__name__)


class MailingListClient(Client):
    """Post subscription forms to a provider's form action URL.

    The provider answers with an HTML page meant for a browser, so the
    response is returned as-is and never inspected for success: any
    response means the form was delivered.

    Example:
        config = {"base_url": "https://example.us1.list-manage.com/subscribe/post?u=1&id=2"}
        with MailingListClient(config) as client:
            client.submit({"EMAIL": "someone@example.com"})
    """

    def submit(self, fields: dict[str, str | list[str]]) -> httpx.Response:
        """Send the form fields url-encoded to the form action.

        Args:
            fields: Form fields; list values are sent as repeated keys

        Returns:
            Whatever the provider answered with

        Raises:
            ConnectionError: If the provider cannot be reached
        """
        response = self.post(
            self.base_url,
            data=fields,
            raise_for_status=False,
        )
        logger.debug(f"Mailing list answered {response.status_code}")
        return response
