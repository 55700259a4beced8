"""Reads backing the financial calendar."""
import logging
from datetime import date

from core.errors import store_operation
from core.periods import month_bounds

from . import events as calendar_events

logger = logging.getLogger("investdesk")


@store_operation("Impossible de charger le calendrier financier.")
def build_month_calendar(year, month, *, client_id=None, today=None):
    """Every calendar event of ``year-month``, in merge order.

    Withdrawals and deposits can be narrowed to one client; meetings and
    posters are shared by the whole office. Filtering by type or status is
    left to :func:`agenda.events.filter_events` on the merged list.
    """
    from agenda.models import MarketingPoster, Meeting
    from clients.models import ClientDeposit, WithdrawalSchedule

    today = today or date.today()
    first_day, last_day = month_bounds(year, month)

    schedules = WithdrawalSchedule.objects.filter(
        due_date__gte=first_day,
        due_date__lte=last_day,
    ).select_related("deposit", "deposit__client")
    deposits = ClientDeposit.objects.filter(
        deposit_date__lte=last_day,
    ).exclude(
        status__in=calendar_events.CLOSED_DEPOSIT_STATUSES,
    ).select_related("client")
    if client_id:
        schedules = schedules.filter(deposit__client_id=client_id)
        deposits = deposits.filter(client_id=client_id)

    meetings = Meeting.objects.filter(meeting_date__gte=first_day, meeting_date__lte=last_day)
    posters = MarketingPoster.objects.filter(poster_date__gte=first_day, poster_date__lte=last_day)

    merged = calendar_events.merge_events(
        withdrawals=calendar_events.withdrawal_events(schedules.order_by("due_date"), today),
        deposits=calendar_events.project_deposit_events(deposits.order_by("deposit_date"), year, month),
        meetings=calendar_events.meeting_events(meetings.order_by("meeting_date")),
        posters=calendar_events.poster_events(posters.order_by("poster_date")),
    )
    logger.debug("Calendar %04d-%02d built with %d event(s)", year, month, len(merged))
    return merged
