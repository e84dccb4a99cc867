"""Client for the external reservation data source.

The check is advisory and non-blocking: it only runs at explicit save time,
and any failure (unconfigured endpoint, network error, non-200 status,
undecodable body) is reported as "no conflicts" so the save can proceed.
"""
import logging
from typing import Optional

import httpx

from hours.domain.ConflictReport import ConflictReport
from hours.domain.Schedule import Schedule
from hours.infra.codec import schedule_to_document
from hours.utilities.config import CONFLICT_CHECK_TIMEOUT, RESERVATIONS_API_URL

logger = logging.getLogger(__name__)


class ConflictChecker:
    def __init__(self, url: Optional[str] = None, timeout: float = CONFLICT_CHECK_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url if url is not None else RESERVATIONS_API_URL
        self.timeout = timeout
        self._transport = transport

    async def check_conflicts(self, restaurant_id: str, schedule: Schedule) -> ConflictReport:
        if not self.url:
            logger.warning("RESERVATIONS_API_URL not set, skipping reservation conflict check")
            return ConflictReport.none()

        payload = {"restaurantId": restaurant_id, **schedule_to_document(schedule)}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError:
            logger.exception("Reservation conflict check failed; assuming no conflicts")
            return ConflictReport.none()

        if response.status_code != 200:
            logger.warning("Reservation service answered %s; assuming no conflicts", response.status_code)
            return ConflictReport.none()
        try:
            data = response.json()
        except ValueError:
            logger.warning("Reservation service returned a non-JSON body; assuming no conflicts")
            return ConflictReport.none()
        if not isinstance(data, dict):
            return ConflictReport.none()
        return ConflictReport.from_dict(data)


__all__ = ['ConflictChecker']
