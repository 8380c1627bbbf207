"""Top-level run state machine: pending -> running -> success | failed."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from prompt_chain.models.run import Run
from prompt_chain.prompt_versions import PromptVersionResolver
from prompt_chain.repository import RunRepository
from prompt_chain.snapshot import ChainSnapshotLoader
from prompt_chain.step_runner import RunStepRunner


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RunExecutor:
    def __init__(
        self,
        repository: RunRepository,
        snapshot_loader: ChainSnapshotLoader,
        prompt_version_resolver: PromptVersionResolver,
        step_runner: RunStepRunner,
    ) -> None:
        self._repository: RunRepository = repository
        self._snapshot_loader: ChainSnapshotLoader = snapshot_loader
        self._prompt_version_resolver: PromptVersionResolver = prompt_version_resolver
        self._step_runner: RunStepRunner = step_runner

    def execute(self, run: Run) -> Run:
        """
        Execute every node of the run and leave it in a terminal status.
        Unexpected errors are logged and stored on the run instead of propagating.
        """
        try:
            run_start = time.perf_counter()
            run.status = "running"
            run.started_at = run.started_at or utcnow()
            self._repository.save_run(run)

            nodes = self._snapshot_loader.load(run)
            prompt_versions = self._prompt_version_resolver.load_for_nodes(nodes, tenant_id=run.tenant_id)
            result = self._step_runner.run_steps(run, nodes, prompt_versions)

            run.status = "failed" if result.failed else "success"
            run.total_tokens_in = result.total_tokens_in or None
            run.total_tokens_out = result.total_tokens_out or None
            run.duration_ms = int((time.perf_counter() - run_start) * 1000)
            run.finished_at = utcnow()
            self._repository.save_run(run)
            return run
        except Exception as exc:
            logger.exception("Run %s failed with an unexpected error", run.id)
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = utcnow()
            self._repository.save_run(run)
            return run
