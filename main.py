import time
import logging
import signal
import threading
import argparse

from core.app_context import AppContext
from core.config_loader import load_config
from database.database import configure_database
from database.init_db import init_db
from pipeline.processor import CandidateProcessor
from pipeline.runner import PollingWorker

logger = logging.getLogger(__name__)

# Set by SIGINT/SIGTERM; the poll loop waits on it between cycles
stop_event = threading.Event()


def signal_handler(sig, frame):
    logger.info("Shutdown signal received")
    stop_event.set()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_worker(ctx: AppContext) -> PollingWorker:
    processor = CandidateProcessor(
        extractor=ctx.extractor,
        scoring_service=ctx.scoring_service,
        notification_service=ctx.notification_service,
    )
    return PollingWorker(
        processor,
        poll_interval_ms=ctx.config.worker.poll_interval_ms,
        batch_size=ctx.config.worker.batch_size,
        stop_event=stop_event,
    )


def main():
    parser = argparse.ArgumentParser(description="Candidate evaluation worker")
    parser.add_argument('--mode', type=str, choices=['all', 'poll', 'api'], default='all',
                        help='What to run: all (default), poll (batch loop only) or api (HTTP triggers only)')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--once', action='store_true', help='Run a single poll cycle and exit')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    configure_logging(args.verbose)
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    config = load_config(args.config)
    logger.info(f"Worker starting in {args.mode.upper()} mode...")

    if not config.llm.api_key:
        logger.warning("OPENAI_API_KEY not set. Candidates will get neutral default scores.")

    # Initialize DB (with retry logic)
    init_db(configure_database(config.database.url))

    ctx = AppContext.build(config)
    worker = build_worker(ctx)

    if args.once:
        start = time.time()
        worker.run_once()
        logger.info(f"=== Single cycle completed in {time.time() - start:.2f}s ===")
        return

    if args.mode == 'poll':
        worker.run_forever()
        return

    from web.backend.app import run_server

    if args.mode == 'all':
        threading.Thread(target=worker.run_forever, name="poll-loop", daemon=True).start()

    # uvicorn installs its own signal handlers and returns on shutdown
    run_server(ctx)
    stop_event.set()


if __name__ == "__main__":
    main()
