"""
Stock Monitor: background low-stock / expiry scanner.

Runs the condition scanner for every pharmacy on a fixed interval so alerts
appear even when nobody opens the stock page. Each scan goes through the
same dedup gate as a manual refresh, so overlapping scans never store the
same message twice.
"""
import logging
import asyncio
from datetime import date
from typing import Optional

from mediserve.core.config import settings
from mediserve.db.session import SessionLocal
from mediserve.models.pharmacy import Pharmacy
from mediserve.services.notification_service import NotificationCenter

logger = logging.getLogger(__name__)


def scan_all_pharmacies(session_factory=SessionLocal, today: Optional[date] = None) -> int:
    """
    Scan every pharmacy once.

    Returns:
        Number of notifications emitted across all pharmacies
    """
    db = session_factory()
    emitted = 0

    try:
        pharmacies = db.query(Pharmacy).all()

        for pharmacy in pharmacies:
            logger.debug(f"[StockMonitor] Scanning pharmacy: {pharmacy.pharmacy_name}")
            center = NotificationCenter.load(db, pharmacy)
            outcome = center.scan(today=today)
            emitted += len(outcome.emitted)
            if outcome.failed:
                logger.warning(f"[StockMonitor] {outcome.failed} candidates failed for pharmacy {pharmacy.id}")

        if emitted > 0:
            logger.info(f"[StockMonitor] Emitted {emitted} new notifications")
        else:
            logger.debug("[StockMonitor] No new notifications")

    except Exception as e:
        logger.error(f"[StockMonitor] Scanner error: {e}")
    finally:
        db.close()

    return emitted


# ============================================================================
# BACKGROUND TASK: runs in asyncio loop alongside FastAPI
# ============================================================================

_monitor_task: Optional[asyncio.Task] = None


async def _stock_monitor_loop(interval: int):
    logger.info(f"[StockMonitor] Started. Interval: {interval}s")

    # Let the server finish starting
    await asyncio.sleep(5)

    while True:
        try:
            # Scanner uses a blocking session; keep it off the event loop
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, scan_all_pharmacies)
        except Exception as e:
            logger.error(f"[StockMonitor] Loop error: {e}")

        await asyncio.sleep(interval)


def start_stock_monitor(interval: int = None):
    """Start the background scanner. Called from FastAPI lifespan."""
    global _monitor_task
    if _monitor_task is not None and not _monitor_task.done():
        return
    _monitor_task = asyncio.create_task(_stock_monitor_loop(interval or settings.STOCK_SCAN_INTERVAL_SECONDS))


def stop_stock_monitor():
    """Cancel the scanner task. Called from FastAPI shutdown."""
    global _monitor_task
    if _monitor_task is not None:
        _monitor_task.cancel()
        _monitor_task = None
    logger.info("[StockMonitor] Stopped")
