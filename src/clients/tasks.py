"""Celery tasks for the clients module."""
from __future__ import annotations

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task
def flag_overdue_withdrawals():
    """Scheduled daily (Celery Beat). Mark unpaid schedules past their due date as overdue."""
    from clients.services import flag_overdue

    flagged = flag_overdue()
    if flagged:
        logger.info("flag_overdue_withdrawals: %d schedule(s) now overdue", flagged)
    return flagged
