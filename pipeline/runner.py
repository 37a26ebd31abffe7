"""Polling loop over the ``needs_scoring`` queue.

Each cycle takes up to ``batch_size`` pending candidates, oldest first,
and processes them one at a time.
"""

import logging
import threading
import time
from typing import Any, Optional

from database.uow import candidate_uow
from pipeline.processor import NOT_PENDING_ERROR, CandidateProcessor
from pipeline.results import BatchResult

logger = logging.getLogger(__name__)


def run_batch(
    processor: CandidateProcessor,
    batch_size: int,
    session_factory=None,
    stop_event: Optional[threading.Event] = None,
) -> BatchResult:
    """Run one poll cycle. Never raises for a single candidate's failure."""
    start = time.time()
    result = BatchResult()

    with candidate_uow(session_factory) as uow:
        candidate_ids = uow.candidates.get_pending_ids(batch_size)

    result.picked = len(candidate_ids)
    if not candidate_ids:
        logger.debug("No pending candidates")
        return result

    logger.info(f"Processing {len(candidate_ids)} pending candidate(s)")

    for candidate_id in candidate_ids:
        if stop_event is not None and stop_event.is_set():
            logger.info("Stop requested; leaving remaining candidates for the next cycle")
            break
        _process_one(processor, candidate_id, result)

    result.execution_time = time.time() - start
    logger.info(
        f"Batch done in {result.execution_time:.2f}s: {result.processed} processed, "
        f"{result.skipped} skipped, {result.failed} failed"
    )
    return result


def _process_one(processor: CandidateProcessor, candidate_id: Any, result: BatchResult) -> None:
    try:
        outcome = processor.process_candidate(candidate_id)
    except Exception as e:
        logger.error(f"Unhandled error processing candidate {candidate_id}: {e}", exc_info=True)
        processor.force_processed(candidate_id)
        result.failed += 1
        result.errors.append(f"{candidate_id}: {e}")
        return

    if outcome.ok:
        result.processed += 1
    elif outcome.error == NOT_PENDING_ERROR:
        # Picked up by a concurrent trigger between the select and the load
        result.skipped += 1
    else:
        result.failed += 1
        result.errors.append(f"{candidate_id}: {outcome.error}")


class PollingWorker:
    """Runs ``run_batch`` every ``poll_interval_ms`` until stopped."""

    def __init__(
        self,
        processor: CandidateProcessor,
        poll_interval_ms: int = 30000,
        batch_size: int = 5,
        session_factory=None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.processor = processor
        self.interval = poll_interval_ms / 1000
        self.batch_size = batch_size
        self.session_factory = session_factory
        self.stop_event = stop_event or threading.Event()
        self.cycle_count = 0

    def run_once(self) -> Optional[BatchResult]:
        self.cycle_count += 1
        try:
            return run_batch(self.processor, self.batch_size, self.session_factory, self.stop_event)
        except Exception as e:
            logger.error(f"Error in poll cycle #{self.cycle_count}: {e}", exc_info=True)
            return None

    def run_forever(self) -> None:
        logger.info(
            f"Worker polling every {self.interval:g}s (batch size {self.batch_size})"
        )
        while not self.stop_event.is_set():
            self.run_once()
            # Returns early when stop() is called
            self.stop_event.wait(self.interval)
        logger.info("Worker stopped")

    def stop(self) -> None:
        self.stop_event.set()
