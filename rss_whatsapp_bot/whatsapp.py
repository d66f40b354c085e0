"""WhatsApp notifier using the Whapi.Cloud API."""

import requests

from .config import WhatsAppConfig
from .exceptions import DeliveryError
from .logging_config import create_execution_logger
from .models import FeedItem


class WhatsAppNotifier:
    """Sends feed items to a WhatsApp channel."""

    def __init__(self, config: WhatsAppConfig, execution_id: str | None = None):
        """Initialize the notifier with configuration."""
        self.config = config
        self.logger = create_execution_logger("whatsapp_notifier", execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Authorization": f"Bearer {config.api_token}",
            }
        )

    def close(self) -> None:
        self.session.close()

    def format_message(self, item: FeedItem) -> str:
        """
        Format a message using WhatsApp markup.

        Args:
            item: The item to format

        Returns:
            Bold title on the first line, link on the second
        """
        return f"*{item.title}*\n{item.link}"

    def notify(self, item: FeedItem) -> None:
        """
        Deliver an item to the configured channel.

        Args:
            item: The item to send

        Raises:
            DeliveryError: If the request fails or the API answers non-2xx
        """
        message = self.format_message(item)
        self.logger.info(
            f"Sending item to WhatsApp:\n{message}",
            feed_name=item.feed_name,
            item_guid=item.guid,
        )

        try:
            response = self.session.post(
                self.config.endpoint,
                json={"to": self.config.channel, "body": message},
            )
        except requests.RequestException as e:
            self.logger.error(f"Error sending message: {e}", item_guid=item.guid)
            raise DeliveryError(f"Error sending message: {e}") from e

        if not 200 <= response.status_code < 300:
            self.logger.error(
                f"Received HTTP {response.status_code}\n"
                f"Response body: {response.text}",
                item_guid=item.guid,
            )
            raise DeliveryError(
                f"Messaging endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        self.logger.info("Message sent successfully", item_guid=item.guid)
