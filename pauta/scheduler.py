"""Daily content slots using APScheduler."""

import asyncio
import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from pauta.config import Settings
from pauta.pipeline import run_content_cycle

logger = logging.getLogger(__name__)


def content_job(slot: str, settings: Settings) -> None:
    """Run one content cycle; failures are logged so the next slot still fires."""
    logger.info(f"=== Content generation '{slot}' starting ===")
    try:
        path = asyncio.run(run_content_cycle(slot, settings))
    except Exception as e:
        logger.error(f"Content generation '{slot}' failed: {e}")
        return
    logger.info(f"=== Content generation '{slot}' complete: {path} ===")


def build_scheduler(settings: Settings) -> BlockingScheduler:
    """Scheduler with one cron job per configured slot."""
    scheduler = BlockingScheduler(timezone=settings.scheduler.timezone)

    for name, slot in settings.scheduler.slots.items():
        scheduler.add_job(
            content_job,
            CronTrigger(hour=slot.hour, minute=slot.minute, timezone=settings.scheduler.timezone),
            args=[name, settings],
            id=f"content-{name}",
            name=f"Content: {name}",
        )
        logger.info(
            f"Registered job: {name} at {slot.hour:02d}:{slot.minute:02d} "
            f"(focus: {', '.join(slot.focus)})"
        )

    return scheduler


def start_scheduler(settings: Settings) -> None:
    """Start the blocking scheduler with the configured slots."""
    scheduler = build_scheduler(settings)

    try:
        logger.info("✓ Scheduler starting...")
        logger.info(f"✓ {len(scheduler.get_jobs())} jobs registered")
        logger.info("Press Ctrl+C to stop\n")

        scheduler.start()

    except (KeyboardInterrupt, SystemExit):
        logger.info("\nReceived interrupt signal")
        scheduler.shutdown()
        logger.info("✓ Scheduler stopped cleanly")
