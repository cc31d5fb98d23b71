"""Challenge workflow orchestration.

This module sequences the three steps of a run (generate webhook, select
the SQL answer, submit it) and nothing else. The HTTP capability is
injected as a ``ChallengeGateway`` so the same runner drives the real
httpx adapter, fakes in tests, or any future entry-point. Printing and
exit codes stay in the CLI layer; errors are re-raised untouched after
recording the stage where they happened.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.config import ChallengeSettings
from core.domain.errors import ChallengeError
from core.domain.models import WebhookRequest
from core.domain.stage import RunStage
from core.interfaces.gateway import ChallengeGateway
from core.services.sql_selector import QuerySelection, describe_selection

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Output of a successful run. Never carries the access token."""

    stage: RunStage
    webhook_url: str
    selection: QuerySelection
    response_text: str


class ChallengeRunner:
    """Runs the challenge once: Start -> ... -> Done, or Failed."""

    def __init__(
        self,
        settings: ChallengeSettings,
        gateway: ChallengeGateway,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._gateway = gateway
        self._log = log or logger
        self._stage = RunStage.START

    @property
    def stage(self) -> RunStage:
        return self._stage

    def _advance(self, stage: RunStage) -> None:
        self._log.debug("Stage %s -> %s", self._stage.value, stage.value)
        self._stage = stage

    def run(self) -> RunResult:
        if self._stage is not RunStage.START:
            raise RuntimeError(f"ChallengeRunner already used (stage={self._stage.value})")

        settings = self._settings
        try:
            self._log.info("Step 1: generating webhook for regNo %s", settings.reg_no)
            request = WebhookRequest(name=settings.name, reg_no=settings.reg_no, email=settings.email)
            webhook = self._gateway.generate_webhook(settings.generate_url, request)
            self._advance(RunStage.WEBHOOK_GENERATED)
            self._log.info("Webhook received: %s", webhook.webhook)
            self._log.info("Access token received (hidden)")

            self._log.info("Step 2: selecting SQL answer for regNo %s", settings.reg_no)
            selection = describe_selection(settings.reg_no)
            self._advance(RunStage.QUERY_SELECTED)
            self._log.info(
                "Last two digits (%02d) are %s; using %s query",
                selection.last_two,
                selection.parity.upper(),
                "first" if selection.is_odd else "second",
            )

            self._log.info("Step 3: submitting final query")
            response_text = self._gateway.submit_solution(
                webhook_url=webhook.webhook,
                access_token=webhook.access_token,
                final_query=selection.query,
            )
            self._advance(RunStage.SUBMITTED)
            self._log.info("Server submission response: %s", response_text)
        except ChallengeError as exc:
            if exc.stage is None:
                exc.stage = self._stage
            self._stage = RunStage.FAILED
            raise

        self._advance(RunStage.DONE)
        self._log.info("Challenge completed successfully")
        return RunResult(
            stage=self._stage,
            webhook_url=webhook.webhook,
            selection=selection,
            response_text=response_text,
        )
