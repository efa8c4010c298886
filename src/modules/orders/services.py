"""Order service layer (Use Cases).

Orchestrates the order lifecycle: creation, supplier acceptance, vendor
routing, party-driven status changes and the ride-driven mirror.  Every
mutation of an order runs under that order's lock; events are published
after the lock is released.

Business rules enforced:
- Status transitions validated against the state machine.
- Each party may only set the statuses listed for its role in
  ``ROLE_ALLOWED_TRANSITIONS``, and only on orders it is part of.
- ``pickup_requested``, ``in_transit`` and ``delivered`` follow the ride.
- A supplier is assigned once; re-assignment is an error.
- Vendors are routed by category sub-role and must be agreed with the
  assigning supplier; ineligible vendors leave items unassigned.
- Entering ``packed_ready`` opens exactly one ride; entering
  ``completed`` issues the invoices.
- History recorded on every status change.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog

from modules.accounts.constants import UserRole
from modules.catalog.constants import ProductCategory
from modules.core.models import coerce_uuid, utc_now
from modules.delivery.constants import RideStatus
from modules.orders.constants import (
    CATEGORY_TO_VENDOR_SUBROLE,
    ORDER_NUMBER_MAX_RETRIES,
    RIDE_DRIVEN_STATES,
    RIDE_TO_ORDER_STATUS,
    ROLE_ALLOWED_TRANSITIONS,
    OrderStatus,
)
from modules.orders.dtos import AcceptOrderResult
from modules.orders.events import OrderCreated, OrderStatusChanged, VendorAssigned
from modules.orders.exceptions import (
    IneligibleSupplier,
    InvalidOrderStatus,
    SupplierAlreadyAssigned,
    TransitionNotAllowed,
)
from modules.orders.models import Order, OrderItem, StatusHistoryEntry

if TYPE_CHECKING:
    from modules.accounts.models import User
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.core.store import KeyedLockRegistry
    from modules.delivery.services import DeliveryService
    from modules.invoicing.services import InvoiceService
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and collaborating services via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        user_repository: IUserRepository,
        delivery_service: DeliveryService,
        invoice_service: InvoiceService,
        event_bus: IEventBus,
        locks: KeyedLockRegistry,
    ) -> None:
        self._order_repo = order_repository
        self._user_repo = user_repository
        self._delivery = delivery_service
        self._invoicing = invoice_service
        self._bus = event_bus
        self._locks = locks

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Optional[Order]:
        """Place a new order for a kitchen.

        Kitchen name and address are copied from the kitchen's profile
        unless given.  The order starts in ``pending_supplier``.

        Raises:
            TransitionNotAllowed: the user placing the order is not a kitchen.
        """
        log = logger.bind(kitchen_id=str(dto.kitchen_id))

        kitchen = self._user_repo.get_by_id(dto.kitchen_id)
        if kitchen is None:
            log.warning("order.kitchen_not_found")
            return None
        if kitchen.role != UserRole.KITCHEN:
            raise TransitionNotAllowed(f"User {kitchen.id} cannot place orders.")

        items = [
            OrderItem(
                product_id=item.product_id,
                product_name=item.product_name,
                category=item.category,
                quantity=item.quantity,
                unit=item.unit,
                price=item.price,
            )
            for item in dto.items
        ]
        address = dto.kitchen_address or kitchen.address

        with self._locks.lock("order_numbers"):
            order = Order(
                order_number=self._new_order_number(),
                kitchen_id=kitchen.id,
                kitchen_name=dto.kitchen_name or kitchen.display_name,
                kitchen_address=address.model_copy(deep=True),
                items=items,
                total_amount=Order.compute_total(items),
                notes=dto.notes,
                status_history=[
                    StatusHistoryEntry(
                        new_status=OrderStatus.PENDING_SUPPLIER,
                        actor_id=kitchen.id,
                        notes="Order created",
                    )
                ],
            )
            self._order_repo.save(order)

        log.info(
            "order.created",
            order_id=str(order.id),
            order_number=order.order_number,
            total_amount=str(order.total_amount),
        )
        self._bus.publish(
            OrderCreated(
                aggregate_id=order.id,
                order_number=order.order_number,
                kitchen_id=order.kitchen_id,
                kitchen_name=order.kitchen_name,
            )
        )
        return order

    def assign_supplier(
        self, order_id: UUID | str, supplier_id: UUID | str
    ) -> Optional[Order]:
        """Record the supplier accepting a pending order.

        Raises:
            SupplierAlreadyAssigned: the order already has a supplier.
            InvalidOrderStatus: the order is not ``pending_supplier``.
            IneligibleSupplier: the user is not an active supplier.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            logger.warning("order.not_found", order_id=str(order_id))
            return None
        supplier = self._user_repo.get_by_id(supplier_id)
        if supplier is None:
            logger.warning("order.supplier_not_found", supplier_id=str(supplier_id))
            return None

        log = logger.bind(order_id=str(order.id), supplier_id=str(supplier.id))

        with self._locks.lock("order", order.id):
            if order.supplier_id is not None:
                log.warning("order.supplier_already_assigned")
                raise SupplierAlreadyAssigned(
                    f"Order {order.order_number} was already accepted."
                )
            if order.status != OrderStatus.PENDING_SUPPLIER:
                log.warning("order.invalid_transition", current_status=order.status)
                raise InvalidOrderStatus(
                    f"Cannot accept order in status {order.status}."
                )
            if supplier.role != UserRole.SUPPLIER or not supplier.is_active:
                raise IneligibleSupplier(f"User {supplier.id} is not an active supplier.")

            order.supplier_id = supplier.id
            order.supplier_name = supplier.display_name
            events = self._transition(
                order, OrderStatus.VENDOR_ASSIGNED, supplier.id, "Supplier accepted order"
            )

        log.info("order.supplier_assigned")
        self._bus.publish_all(events)
        return order

    def assign_vendor(
        self,
        order_id: UUID | str,
        category: ProductCategory | str,
        vendor_id: UUID | str,
        assigned_by: UUID | str,
    ) -> List[OrderItem]:
        """Route every item of *category* to a vendor.

        Only the supplier that accepted the order (or an admin) routes its
        items.  Returns the items that were assigned; an empty list means
        nothing changed (unknown ids, ineligible vendor, or no such items).

        Raises:
            InvalidOrderStatus: the order has no supplier yet, or is already
                completed or cancelled.
            TransitionNotAllowed: *assigned_by* is not the order's supplier.
        """
        category = ProductCategory(category)
        order = self._order_repo.get_by_id(order_id)
        vendor = self._user_repo.get_by_id(vendor_id)
        assigner = self._user_repo.get_by_id(assigned_by)
        if order is None or vendor is None or assigner is None:
            logger.warning(
                "order.vendor_assignment_skipped",
                order_id=str(order_id),
                vendor_id=str(vendor_id),
            )
            return []

        log = logger.bind(order_id=str(order.id), vendor_id=str(vendor.id), category=category)

        with self._locks.lock("order", order.id):
            if order.is_terminal:
                raise InvalidOrderStatus(
                    f"Cannot route items of order in status {order.status}."
                )
            if order.supplier_id is None:
                raise InvalidOrderStatus(
                    f"Order {order.order_number} has not been accepted by a supplier."
                )
            if assigner.role != UserRole.ADMIN and order.supplier_id != assigner.id:
                log.warning("order.assigner_not_supplier", assigner_id=str(assigner.id))
                raise TransitionNotAllowed(
                    f"User {assigner.id} is not the supplier of order {order.order_number}."
                )
            supplier = self._user_repo.get_by_id(order.supplier_id)
            if supplier is None or not self._is_eligible_vendor(vendor, category, supplier):
                log.warning("order.vendor_ineligible")
                return []

            items = order.items_in(category)
            for item in items:
                item.vendor_id = vendor.id
                item.vendor_name = vendor.display_name
            if items:
                order.touch()
                self._order_repo.save(order)

        if not items:
            log.info("order.no_items_in_category")
            return []

        log.info("order.vendor_assigned", items=len(items))
        self._bus.publish(
            VendorAssigned(
                aggregate_id=order.id,
                order_number=order.order_number,
                vendor_id=vendor.id,
                category=category,
            )
        )
        return items

    def accept_order(
        self, order_id: UUID | str, supplier_id: UUID | str
    ) -> Optional[AcceptOrderResult]:
        """Supplier accepts an order and routes each category.

        The first eligible vendor from the supplier's agreed pool takes each
        category; categories without one are reported as unassigned.
        """
        order = self.assign_supplier(order_id, supplier_id)
        if order is None:
            return None

        assigned: Dict[ProductCategory, UUID] = {}
        unassigned: List[ProductCategory] = []
        for category in order.categories:
            candidates = self.eligible_vendors(category, order.supplier_id)
            if candidates and self.assign_vendor(
                order.id, category, candidates[0].id, order.supplier_id
            ):
                assigned[category] = candidates[0].id
            else:
                unassigned.append(category)

        if unassigned:
            logger.warning(
                "order.categories_unassigned",
                order_id=str(order.id),
                categories=[str(c) for c in unassigned],
            )
        return AcceptOrderResult(order=order, assigned=assigned, unassigned=unassigned)

    def update_status(
        self,
        order_id: UUID | str,
        new_status: OrderStatus | str,
        actor_id: UUID | str,
        notes: str = "",
    ) -> Optional[Order]:
        """Move an order to *new_status* on behalf of *actor_id*.

        A supplier setting ``vendor_assigned`` is an acceptance and goes
        through ``assign_supplier``.

        Raises:
            TransitionNotAllowed: the actor's role may not set this status,
                the actor is not a party to the order, or the status is
                ride-driven.
            InvalidOrderStatus: the state machine forbids the transition.
        """
        new_status = OrderStatus(new_status)
        if new_status in RIDE_DRIVEN_STATES:
            raise TransitionNotAllowed(f"Status {new_status} follows the delivery ride.")

        actor = self._user_repo.get_by_id(actor_id)
        if actor is None:
            logger.warning("order.actor_not_found", actor_id=str(actor_id))
            return None
        if new_status not in ROLE_ALLOWED_TRANSITIONS.get(actor.role, set()):
            raise TransitionNotAllowed(f"Role {actor.role} cannot set status {new_status}.")
        if new_status == OrderStatus.VENDOR_ASSIGNED:
            return self.assign_supplier(order_id, actor.id)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            logger.warning("order.not_found", order_id=str(order_id))
            return None

        log = logger.bind(
            order_id=str(order.id),
            current_status=order.status,
            new_status=new_status,
            actor_id=str(actor.id),
        )

        with self._locks.lock("order", order.id):
            if not self._is_party(order, actor):
                log.warning("order.actor_not_party")
                raise TransitionNotAllowed(
                    f"User {actor.id} is not a party to order {order.order_number}."
                )
            if not order.can_transition_to(new_status):
                log.warning("order.invalid_transition")
                raise InvalidOrderStatus(
                    f"Cannot transition from {order.status} to {new_status}."
                )
            events = self._transition(order, new_status, actor.id, notes)

        log.info("order.status_updated")
        self._bus.publish_all(events)
        return order

    def cancel_order(
        self, order_id: UUID | str, actor_id: UUID | str, notes: str = ""
    ) -> Optional[Order]:
        """Cancel a non-terminal order.

        Nothing is compensated: an open ride stays open and issued invoices
        stay issued.
        """
        return self.update_status(
            order_id, OrderStatus.CANCELLED, actor_id, notes or "Order cancelled"
        )

    def apply_ride_status(
        self,
        order_id: UUID | str,
        ride_status: RideStatus | str,
        transporter_id: Optional[UUID] = None,
        transporter_name: Optional[str] = None,
    ) -> Optional[Order]:
        """Mirror a ride status into its order.

        Repeated or stale ride updates leave the order as it is.
        """
        target = RIDE_TO_ORDER_STATUS.get(ride_status)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            logger.warning("order.not_found", order_id=str(order_id))
            return None
        if target is None:
            return order

        log = logger.bind(order_id=str(order.id), ride_status=ride_status, new_status=target)

        with self._locks.lock("order", order.id):
            if order.status == target:
                return order
            if not order.can_transition_to(target):
                log.warning("order.ride_status_ignored", current_status=order.status)
                return order

            if target == OrderStatus.PICKUP_REQUESTED:
                order.transporter_id = transporter_id
                order.transporter_name = transporter_name
            elif target == OrderStatus.IN_TRANSIT:
                order.pickup_time = utc_now()
            elif target == OrderStatus.DELIVERED:
                order.delivery_time = utc_now()
            events = self._transition(
                order, OrderStatus(target), transporter_id, f"Ride {ride_status}"
            )

        log.info("order.ride_status_applied")
        self._bus.publish_all(events)
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: UUID | str) -> Optional[Order]:
        return self._order_repo.get_by_id(order_id)

    def get_order_by_number(self, order_number: str) -> Optional[Order]:
        return self._order_repo.get_by_order_number(order_number)

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return every order, newest first, optionally filtered."""
        orders = self._order_repo.list(filters)
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    def get_orders_by_kitchen(self, kitchen_id: UUID | str) -> List[Order]:
        kitchen_id = coerce_uuid(kitchen_id)
        return self._order_repo.list_by_kitchen(kitchen_id) if kitchen_id else []

    def get_orders_by_supplier(self, supplier_id: UUID | str) -> List[Order]:
        supplier_id = coerce_uuid(supplier_id)
        return self._order_repo.list_by_supplier(supplier_id) if supplier_id else []

    def get_orders_by_vendor(
        self, vendor_id: UUID | str, category: Optional[ProductCategory | str] = None
    ) -> List[Order]:
        vendor_id = coerce_uuid(vendor_id)
        return self._order_repo.list_by_vendor(vendor_id, category) if vendor_id else []

    def get_orders_by_transporter(self, transporter_id: UUID | str) -> List[Order]:
        transporter_id = coerce_uuid(transporter_id)
        return self._order_repo.list_by_transporter(transporter_id) if transporter_id else []

    def get_todays_orders(self, now: Optional[datetime] = None) -> List[Order]:
        today = (now or utc_now()).date()
        return [order for order in self.list_orders() if order.created_at.date() == today]

    def get_pending_orders_for_supplier(self, supplier_id: UUID | str) -> List[Order]:
        """Pending orders from kitchens the supplier has an agreement with."""
        supplier = self._user_repo.get_by_id(supplier_id)
        if supplier is None:
            return []

        pending = []
        for order in self._order_repo.list_by_status(OrderStatus.PENDING_SUPPLIER):
            kitchen = self._user_repo.get_by_id(order.kitchen_id)
            if kitchen is not None and supplier.is_agreed_with(kitchen):
                pending.append(order)
        return pending

    def eligible_vendors(
        self, category: ProductCategory | str, assigner_id: UUID | str
    ) -> List[User]:
        """Active vendors of the category's sub-role agreed with the assigner."""
        category = ProductCategory(category)
        assigner = self._user_repo.get_by_id(assigner_id)
        if assigner is None:
            return []
        return [
            vendor
            for vendor in self._user_repo.list_by_role(UserRole.VENDOR, active_only=True)
            if self._is_eligible_vendor(vendor, category, assigner)
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _transition(
        self,
        order: Order,
        new_status: OrderStatus,
        actor_id: Optional[UUID],
        notes: str,
    ) -> List[DomainEvent]:
        """Apply a validated transition and its side effects.

        Must be called with the order lock held.  Returns the events to
        publish once the lock is released, side-effect events first.
        """
        old_status = order.status
        order.record_transition(new_status, actor_id, notes)
        self._order_repo.save(order)

        events: List[DomainEvent] = []
        if new_status == OrderStatus.PACKED_READY:
            self._delivery.create_ride(
                order.id,
                order.kitchen_address,
                order.kitchen_address,
                order_number=order.order_number,
                outbox=events,
            )
        elif new_status == OrderStatus.COMPLETED:
            self._invoicing.generate_for_order(order, outbox=events)

        events.append(
            OrderStatusChanged(
                aggregate_id=order.id,
                order_number=order.order_number,
                kitchen_id=order.kitchen_id,
                old_status=old_status,
                new_status=new_status,
                actor_id=actor_id,
            )
        )
        return events

    @staticmethod
    def _is_party(order: Order, actor: User) -> bool:
        if actor.role == UserRole.ADMIN:
            return True
        if actor.role == UserRole.KITCHEN:
            return order.kitchen_id == actor.id
        if actor.role == UserRole.SUPPLIER:
            return order.supplier_id == actor.id
        if actor.role == UserRole.VENDOR:
            return order.has_vendor(actor.id)
        return False

    @staticmethod
    def _is_eligible_vendor(vendor: User, category: ProductCategory, assigner: User) -> bool:
        return (
            vendor.role == UserRole.VENDOR
            and vendor.is_active
            and vendor.sub_role == CATEGORY_TO_VENDOR_SUBROLE.get(category)
            and vendor.is_agreed_with(assigner)
        )

    def _new_order_number(self) -> str:
        for _ in range(ORDER_NUMBER_MAX_RETRIES):
            candidate = Order.generate_order_number()
            if self._order_repo.get_by_order_number(candidate) is None:
                return candidate
        raise RuntimeError(
            f"Failed to generate unique order_number after {ORDER_NUMBER_MAX_RETRIES} attempts"
        )
