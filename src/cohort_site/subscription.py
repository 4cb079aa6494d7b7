"""Newsletter subscription form.

The provider's subscribe endpoint answers with an HTML page that cannot be
inspected from the landing page, so the form posts into a hidden frame.
Completion is inferred: the frame loading while a submission is pending
counts as success, a deadline passing first counts as failure. Success
only means the request reached the provider, not that the address was
subscribed.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable

from cohort_site.clients import MailingListClient
from cohort_site.config import SiteConfig

logger = logging.getLogger(__name__)

SUBMIT_TIMEOUT = 12.0
CONFIRMATION_PATH = "/thanks"
FRAME_NAME = "mc-target"

SUCCESS_MESSAGE = "You're on the list. Check your email to confirm."
FAILURE_MESSAGE = "We couldn't reach the mailing list. Please try again."


class SubscriptionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


class SubscriptionForm:
    """The fields and target of the subscription form.

    Attributes:
        action: Provider form action URL, or None when not configured
        honeypot: Name of the bot-trap field that must stay empty
        tags: Tag values attached to the subscriber
    """

    def __init__(self, config: SiteConfig):
        self.action = config.mc_form_action or None
        self.honeypot = config.mc_honeypot
        self.raw_tags = config.mc_tags
        self.tags = [tag.strip() for tag in config.mc_tags.split(",") if tag.strip()]
        self.timeout = SUBMIT_TIMEOUT
        self.frame_name = FRAME_NAME
        self.confirmation_path = CONFIRMATION_PATH

    @property
    def ready(self) -> bool:
        return self.action is not None

    def hidden_fields(self) -> list[tuple[str, str]]:
        """Fields other than the email, in form order."""
        fields = [(self.honeypot, ""), ("tags", self.raw_tags)]
        fields.extend(("tags[]", tag) for tag in self.tags)
        return fields

    def fields(self, email: str) -> dict[str, str | list[str]]:
        """All form fields for a submission, repeated keys as lists."""
        return {
            "EMAIL": email,
            self.honeypot: "",
            "tags": self.raw_tags,
            "tags[]": list(self.tags),
        }

    def client_config(self) -> dict:
        return {"base_url": self.action, "retry_attempts": 1, "timeout": self.timeout}


class SubscriptionAttempt:
    """One submission racing the provider's answer against a deadline.

    ``idle -> submitting -> success | failure``. Whichever of
    ``frame_loaded`` and ``timed_out`` happens first while submitting
    decides the outcome; the other is then a no-op. The deadline timer is
    cancelled as soon as the frame loads.
    """

    def __init__(
        self,
        timeout: float = SUBMIT_TIMEOUT,
        on_change: Callable[["SubscriptionAttempt"], None] | None = None,
    ):
        self.timeout = timeout
        self.status = SubscriptionStatus.IDLE
        self.message = ""
        self.redirect_to: str | None = None
        self._on_change = on_change
        self._timer: asyncio.TimerHandle | None = None
        self._settled: asyncio.Future | None = None
        self.send_task: asyncio.Future | None = None

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Enter submitting and arm the deadline, replacing any pending one."""
        loop = loop or asyncio.get_running_loop()
        self._cancel_timer()
        self._settled = loop.create_future()
        self._transition(SubscriptionStatus.SUBMITTING, "")
        self._timer = loop.call_later(self.timeout, self.timed_out)

    def frame_loaded(self) -> bool:
        """The provider answered. Returns True if this decided the outcome."""
        self._cancel_timer()
        if self.status != SubscriptionStatus.SUBMITTING:
            return False
        self.redirect_to = CONFIRMATION_PATH
        self._transition(SubscriptionStatus.SUCCESS, SUCCESS_MESSAGE)
        return True

    def timed_out(self) -> bool:
        """The deadline passed. Returns True if this decided the outcome."""
        self._timer = None
        if self.status != SubscriptionStatus.SUBMITTING:
            return False
        logger.warning(f"No answer from the mailing list within {self.timeout}s")
        self._transition(SubscriptionStatus.FAILURE, FAILURE_MESSAGE)
        return True

    async def run(self, send: Callable[[], Awaitable[Any]]) -> SubscriptionStatus:
        """Start a submission and wait for the first outcome.

        Args:
            send: Coroutine factory delivering the form; its completion
                counts as the frame loading, its failure is left to the
                deadline

        Returns:
            SUCCESS or FAILURE
        """
        self.start()
        assert self._settled is not None
        settled = self._settled
        self.send_task = asyncio.ensure_future(send())
        self.send_task.add_done_callback(self._on_sent)
        await settled
        return self.status

    def _on_sent(self, task: asyncio.Future) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Subscription request failed: {error}")
            return
        self.frame_loaded()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _transition(self, status: SubscriptionStatus, message: str) -> None:
        self.status = status
        self.message = message
        if status in (SubscriptionStatus.SUCCESS, SubscriptionStatus.FAILURE):
            if self._settled is not None and not self._settled.done():
                self._settled.set_result(status)
        if self._on_change is not None:
            self._on_change(self)


async def subscribe(
    form: SubscriptionForm,
    email: str,
    client: MailingListClient | None = None,
) -> SubscriptionAttempt:
    """Submit an address to the mailing list.

    Returns the attempt; it stays idle when the form is not configured or
    the address is blank, as the disabled browser form would.
    """
    attempt = SubscriptionAttempt(timeout=form.timeout)
    email = email.strip()

    if not form.ready:
        logger.error("Mailing list not configured (form action missing)")
        return attempt
    if not email:
        logger.error("No email address given")
        return attempt

    own_client = client is None
    if client is None:
        client = MailingListClient(form.client_config())

    try:
        await attempt.run(lambda: asyncio.to_thread(client.submit, form.fields(email)))
        # A late answer no longer changes the outcome; let it land before closing.
        await asyncio.gather(attempt.send_task, return_exceptions=True)
    finally:
        if own_client:
            client.close()

    return attempt
