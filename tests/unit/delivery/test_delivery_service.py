"""Unit tests for DeliveryService: ride creation, claiming and progress."""

from __future__ import annotations

import threading
from uuid import uuid4

import pytest

from modules.accounts.constants import SubRole, UserRole
from modules.core.models import Address
from modules.delivery.constants import RideStatus
from modules.delivery.exceptions import (
    IneligibleTransporter,
    InvalidRideStatus,
    RideAlreadyAccepted,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def ride(container):
    return container.delivery.create_ride(
        uuid4(), Address(street="Pickup"), Address(street="Drop"), order_number="ORD000001001"
    )


class TestCreateRide:
    def test_new_ride_is_requested_and_unclaimed(self, ride):
        assert ride.status == RideStatus.REQUESTED
        assert ride.transporter_id is None
        assert ride.is_available

    def test_second_call_returns_same_ride(self, container, ride):
        again = container.delivery.create_ride(ride.order_id, Address(), Address())
        assert again.id == ride.id
        assert len(container.delivery.get_available_rides()) == 1

    def test_available_rides_oldest_first(self, container, ride):
        newer = container.delivery.create_ride(uuid4(), Address(), Address())
        assert [r.id for r in container.delivery.get_available_rides()] == [ride.id, newer.id]


class TestAcceptRide:
    def test_claim_sets_transporter(self, container, transporter, ride):
        claimed = container.delivery.accept_ride(ride.id, transporter.id)
        assert claimed.status == RideStatus.ACCEPTED
        assert claimed.transporter_id == transporter.id
        assert claimed.transporter_name == "Ravi"
        assert claimed.accepted_at is not None
        assert container.delivery.get_available_rides() == []

    def test_second_claim_fails(self, container, transporter, register, ride):
        other = register(UserRole.TRANSPORTER, "other-driver@example.com")
        container.delivery.accept_ride(ride.id, transporter.id)
        with pytest.raises(RideAlreadyAccepted):
            container.delivery.accept_ride(ride.id, other.id)

    def test_non_transporter_cannot_claim(self, container, kitchen, ride):
        with pytest.raises(IneligibleTransporter):
            container.delivery.accept_ride(ride.id, kitchen.id)

    def test_inactive_transporter_cannot_claim(self, container, transporter, ride):
        container.accounts.set_active(transporter.id, False)
        with pytest.raises(IneligibleTransporter):
            container.delivery.accept_ride(ride.id, transporter.id)

    def test_unknown_ride_is_none(self, container, transporter):
        assert container.delivery.accept_ride(uuid4(), transporter.id) is None

    def test_concurrent_claims_have_one_winner(self, container, register, ride):
        drivers = [
            register(UserRole.TRANSPORTER, f"d{i}@example.com", sub_role=SubRole.DRIVER)
            for i in range(6)
        ]
        winners = []
        barrier = threading.Barrier(len(drivers))

        def attempt(driver):
            barrier.wait()
            try:
                container.delivery.accept_ride(ride.id, driver.id)
                winners.append(driver.id)
            except RideAlreadyAccepted:
                pass

        threads = [threading.Thread(target=attempt, args=(d,)) for d in drivers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(winners) == 1
        assert container.delivery.get_ride(ride.id).transporter_id == winners[0]


class TestUpdateRideStatus:
    def test_forward_moves_stamp_timestamps(self, container, transporter, ride):
        container.delivery.accept_ride(ride.id, transporter.id)
        container.delivery.update_ride_status(ride.id, RideStatus.PICKED_UP, transporter.id)
        container.delivery.update_ride_status(ride.id, RideStatus.IN_TRANSIT, transporter.id)
        done = container.delivery.update_ride_status(
            ride.id, RideStatus.DELIVERED, transporter.id
        )
        assert done.status == RideStatus.DELIVERED
        assert done.picked_up_at <= done.in_transit_at <= done.delivered_at

    def test_backward_move_rejected(self, container, transporter, ride):
        container.delivery.accept_ride(ride.id, transporter.id)
        container.delivery.update_ride_status(ride.id, RideStatus.PICKED_UP, transporter.id)
        with pytest.raises(InvalidRideStatus):
            container.delivery.update_ride_status(ride.id, RideStatus.REQUESTED, transporter.id)

    def test_accepting_goes_through_accept_ride(self, container, ride):
        with pytest.raises(InvalidRideStatus):
            container.delivery.update_ride_status(ride.id, RideStatus.ACCEPTED)

    def test_only_claiming_transporter_moves_ride(
        self, container, transporter, register, ride
    ):
        other = register(UserRole.TRANSPORTER, "other-driver@example.com")
        container.delivery.accept_ride(ride.id, transporter.id)
        with pytest.raises(IneligibleTransporter):
            container.delivery.update_ride_status(ride.id, RideStatus.PICKED_UP, other.id)

    def test_unknown_ride_is_none(self, container):
        assert container.delivery.update_ride_status(uuid4(), RideStatus.PICKED_UP) is None


def test_location_updates(container, transporter, ride):
    container.delivery.accept_ride(ride.id, transporter.id)
    updated = container.delivery.update_location(ride.id, 19.07, 72.87)
    assert (updated.coordinates.lat, updated.coordinates.lng) == (19.07, 72.87)
    assert [r.id for r in container.delivery.get_rides_by_transporter(transporter.id)] == [
        ride.id
    ]


def test_location_only_from_claiming_transporter(container, transporter, register, ride):
    other = register(UserRole.TRANSPORTER, "other-driver@example.com")
    with pytest.raises(IneligibleTransporter):
        container.delivery.update_location(ride.id, 1.0, 1.0, transporter.id)

    container.delivery.accept_ride(ride.id, transporter.id)
    with pytest.raises(IneligibleTransporter):
        container.delivery.update_location(ride.id, 1.0, 1.0, other.id)
    assert container.delivery.get_ride(ride.id).coordinates is None

    updated = container.delivery.update_location(ride.id, 19.07, 72.87, transporter.id)
    assert updated.coordinates.lat == 19.07
