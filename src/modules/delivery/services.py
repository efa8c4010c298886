"""Delivery dispatch service (Use Cases).

Creates one pickup ride per packed order, lets transporters claim rides
first-come first-served and moves claimed rides forward.  Every change is
published as a ``RideStatusChanged`` event; the orders module mirrors it
into the parent order.

Business rules enforced here:
- At most one ride per order; creating it again returns the existing ride.
- A ride is claimed exactly once (``RideAlreadyAccepted`` for latecomers).
- Only active transporters claim rides, and only the claiming transporter
  moves them.
- Ride statuses move forward only (``RIDE_TRANSITIONS``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog

from modules.accounts.constants import UserRole
from modules.core.models import Coordinates, coerce_uuid, utc_now
from modules.delivery.constants import RIDE_TIMESTAMP_FIELDS, RideStatus
from modules.delivery.events import RideRequested, RideStatusChanged
from modules.delivery.exceptions import (
    IneligibleTransporter,
    InvalidRideStatus,
    RideAlreadyAccepted,
)
from modules.delivery.models import DeliveryRide

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.core.models import Address
    from modules.core.store import KeyedLockRegistry
    from modules.delivery.repositories.interfaces import IRideRepository
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class DeliveryService:
    """Application service for delivery rides."""

    def __init__(
        self,
        ride_repository: IRideRepository,
        user_repository: IUserRepository,
        event_bus: IEventBus,
        locks: KeyedLockRegistry,
    ) -> None:
        self._ride_repo = ride_repository
        self._user_repo = user_repository
        self._bus = event_bus
        self._locks = locks

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_ride(
        self,
        order_id: UUID,
        pickup: Address,
        drop: Address,
        order_number: Optional[str] = None,
        outbox: Optional[List[DomainEvent]] = None,
    ) -> DeliveryRide:
        """Open a pickup request for *order_id*, once.

        A repeated call returns the ride created the first time without
        notifying transporters again.  When *outbox* is given the
        ``RideRequested`` event is appended to it instead of published, for
        callers that still hold a lock.
        """
        log = logger.bind(order_id=str(order_id))

        with self._locks.lock("order_ride", order_id):
            existing = self._ride_repo.get_by_order(order_id)
            if existing is not None:
                log.info("ride.already_exists", ride_id=str(existing.id))
                return existing

            ride = DeliveryRide(
                order_id=order_id,
                order_number=order_number,
                pickup_address=pickup.model_copy(deep=True),
                drop_address=drop.model_copy(deep=True),
            )
            self._ride_repo.save(ride)

        log.info("ride.requested", ride_id=str(ride.id))
        event = RideRequested(aggregate_id=ride.id, order_id=order_id, order_number=order_number)
        if outbox is None:
            self._bus.publish(event)
        else:
            outbox.append(event)
        return ride

    def accept_ride(
        self, ride_id: UUID | str, transporter_id: UUID | str
    ) -> Optional[DeliveryRide]:
        """Claim a requested ride.

        Raises:
            IneligibleTransporter: the user is not an active transporter.
            RideAlreadyAccepted: another transporter claimed it first.
        """
        transporter = self._user_repo.get_by_id(transporter_id)
        if transporter is None:
            logger.warning("ride.transporter_not_found", transporter_id=str(transporter_id))
            return None
        if transporter.role != UserRole.TRANSPORTER or not transporter.is_active:
            raise IneligibleTransporter(f"User {transporter.id} cannot accept rides.")

        ride = self._ride_repo.get_by_id(ride_id)
        if ride is None:
            logger.warning("ride.not_found", ride_id=str(ride_id))
            return None

        log = logger.bind(ride_id=str(ride.id), transporter_id=str(transporter.id))

        with self._locks.lock("ride", ride.id):
            if not ride.is_available:
                log.warning("ride.already_accepted", status=ride.status)
                raise RideAlreadyAccepted(f"Ride {ride.id} is already {ride.status}.")

            ride.transporter_id = transporter.id
            ride.transporter_name = transporter.name
            ride.status = RideStatus.ACCEPTED
            ride.accepted_at = utc_now()
            self._ride_repo.save(ride)

        log.info("ride.accepted")
        self._publish_status(ride)
        return ride

    def update_ride_status(
        self,
        ride_id: UUID | str,
        status: RideStatus | str,
        transporter_id: Optional[UUID | str] = None,
    ) -> Optional[DeliveryRide]:
        """Move a claimed ride one step forward.

        When *transporter_id* is given it must be the transporter on the
        ride.  Claiming goes through ``accept_ride``.

        Raises:
            InvalidRideStatus: the move is not a forward transition.
            IneligibleTransporter: the caller does not own the ride.
        """
        status = RideStatus(status)
        ride = self._ride_repo.get_by_id(ride_id)
        if ride is None:
            logger.warning("ride.not_found", ride_id=str(ride_id))
            return None

        log = logger.bind(ride_id=str(ride.id), current_status=ride.status, new_status=status)

        with self._locks.lock("ride", ride.id):
            if transporter_id is not None and coerce_uuid(transporter_id) != ride.transporter_id:
                raise IneligibleTransporter(f"Ride {ride.id} belongs to another transporter.")
            if status == RideStatus.ACCEPTED or not ride.can_transition_to(status):
                log.warning("ride.invalid_transition")
                raise InvalidRideStatus(f"Cannot move ride from {ride.status} to {status}.")

            ride.status = status
            setattr(ride, RIDE_TIMESTAMP_FIELDS[status], utc_now())
            self._ride_repo.save(ride)

        log.info("ride.status_updated")
        self._publish_status(ride)
        return ride

    def update_location(
        self,
        ride_id: UUID | str,
        lat: float,
        lng: float,
        transporter_id: Optional[UUID | str] = None,
    ) -> Optional[DeliveryRide]:
        """Record the ride's latest coordinates.

        When *transporter_id* is given it must be the transporter that
        claimed the ride; unclaimed rides have no position to report.

        Raises:
            IneligibleTransporter: the caller does not own the ride.
        """
        ride = self._ride_repo.get_by_id(ride_id)
        if ride is None:
            logger.warning("ride.not_found", ride_id=str(ride_id))
            return None

        with self._locks.lock("ride", ride.id):
            if transporter_id is not None and coerce_uuid(transporter_id) != ride.transporter_id:
                logger.warning(
                    "ride.location_rejected",
                    ride_id=str(ride.id),
                    transporter_id=str(transporter_id),
                )
                raise IneligibleTransporter(f"Ride {ride.id} belongs to another transporter.")
            ride.coordinates = Coordinates(lat=lat, lng=lng)
            self._ride_repo.save(ride)

        logger.debug("ride.location_updated", ride_id=str(ride.id), lat=lat, lng=lng)
        return ride

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_ride(self, ride_id: UUID | str) -> Optional[DeliveryRide]:
        return self._ride_repo.get_by_id(ride_id)

    def get_available_rides(self) -> List[DeliveryRide]:
        return self._ride_repo.list_available()

    def get_rides_by_transporter(self, transporter_id: UUID | str) -> List[DeliveryRide]:
        transporter_id = coerce_uuid(transporter_id)
        if transporter_id is None:
            return []
        return self._ride_repo.list_by_transporter(transporter_id)

    def get_ride_by_order(self, order_id: UUID | str) -> Optional[DeliveryRide]:
        order_id = coerce_uuid(order_id)
        if order_id is None:
            return None
        return self._ride_repo.get_by_order(order_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _publish_status(self, ride: DeliveryRide) -> None:
        self._bus.publish(
            RideStatusChanged(
                aggregate_id=ride.id,
                order_id=ride.order_id,
                status=ride.status,
                transporter_id=ride.transporter_id,
                transporter_name=ride.transporter_name,
            )
        )
