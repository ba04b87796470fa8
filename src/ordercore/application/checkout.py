"""Application service: Checkout use case.

Runs the whole placement of an order as a pipeline of recorded steps:

1. Reserve stock (build the order line by line)
2. Calculate the discount
3. Calculate shipping (skipped when the order ships for free)
4. Persist the order
5. Schedule the delivery
6. Send the confirmation

Steps run strictly in that order; the order is always persisted before
the customer is notified.  Each completed step is recorded in a
``CheckoutState``.  If a step fails, the completed steps that can be
undone are compensated in reverse order and the original error is
re-raised unchanged.  Delivery scheduling and notification cannot be
undone through their ports, so those are only logged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from loguru import logger

from ordercore.application.create_order import build_order
from ordercore.application.dto import CheckoutDTO, CreateOrderRequest, order_to_dto
from ordercore.domain.model.customer import Customer
from ordercore.domain.model.order import Order
from ordercore.domain.model.value_objects import Money
from ordercore.domain.ports import FulfillmentPort, NotificationPort
from ordercore.domain.repository.order_store import OrderStore
from ordercore.domain.repository.product_catalog import ProductCatalog
from ordercore.domain.service.order_discount_service import OrderDiscountService
from ordercore.domain.service.stock_allocation_service import StockAllocationService

T = TypeVar("T")


class CheckoutStep(str, Enum):
    RESERVE_STOCK = "reserve_stock"
    CALCULATE_DISCOUNT = "calculate_discount"
    CALCULATE_SHIPPING = "calculate_shipping"
    PERSIST_ORDER = "persist_order"
    SCHEDULE_DELIVERY = "schedule_delivery"
    SEND_CONFIRMATION = "send_confirmation"


@dataclass
class CheckoutState:
    """Progress of one checkout run."""

    order: Order
    discount: Money | None = None
    shipping_cost: Money | None = None
    free_shipping: bool = False
    completed_steps: list[CheckoutStep] = field(default_factory=list)
    current_step: CheckoutStep | None = None
    compensated_steps: list[CheckoutStep] = field(default_factory=list)


class CheckoutHandler:

    def __init__(
        self,
        order_store: OrderStore,
        product_catalog: ProductCatalog,
        notifier: NotificationPort,
        fulfillment: FulfillmentPort,
        discount_service: OrderDiscountService | None = None,
    ) -> None:
        self._order_store = order_store
        self._product_catalog = product_catalog
        self._notifier = notifier
        self._fulfillment = fulfillment
        self._discounts = discount_service or OrderDiscountService()
        self._compensations: dict[CheckoutStep, Callable[[CheckoutState], None]] = {
            CheckoutStep.RESERVE_STOCK: self._release_stock,
            CheckoutStep.PERSIST_ORDER: self._delete_order,
        }
        self.last_state: CheckoutState | None = None

    def handle(self, request: CreateOrderRequest) -> CheckoutDTO:
        customer = Customer(
            id=request.customer_id,
            name=request.customer_name,
            email=request.customer_email,
            address=request.customer_address,
        )
        state = CheckoutState(order=Order.create(customer))
        self.last_state = state
        order = state.order

        try:
            self._run(
                state,
                CheckoutStep.RESERVE_STOCK,
                lambda: build_order(customer, request.items, self._product_catalog, order),
            )
            state.discount = self._run(
                state,
                CheckoutStep.CALCULATE_DISCOUNT,
                lambda: self._discounts.calculate_discount(order),
            )
            state.free_shipping = self._discounts.is_eligible_for_free_shipping(order)
            state.shipping_cost = self._run(
                state, CheckoutStep.CALCULATE_SHIPPING, lambda: self._shipping_cost(state)
            )
            self._run(state, CheckoutStep.PERSIST_ORDER, lambda: self._order_store.save(order))
            self._run(
                state,
                CheckoutStep.SCHEDULE_DELIVERY,
                lambda: self._fulfillment.schedule_delivery(order),
            )
            self._run(
                state,
                CheckoutStep.SEND_CONFIRMATION,
                lambda: self._notifier.send_order_confirmation(order, customer, state.discount),
            )
        except Exception:
            logger.error("Checkout of order {} failed at step {}", order.id, state.current_step)
            self._compensate(state)
            raise

        logger.info(
            "Order {} checked out: total {}, discount {}, shipping {}",
            order.id,
            order.total_amount,
            state.discount,
            state.shipping_cost,
        )
        return CheckoutDTO(
            order=order_to_dto(order),
            discount=str(state.discount),
            shipping_cost=str(state.shipping_cost),
            free_shipping=state.free_shipping,
        )

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _run(state: CheckoutState, step: CheckoutStep, action: Callable[[], T]) -> T:
        state.current_step = step
        result = action()
        state.completed_steps.append(step)
        state.current_step = None
        logger.debug("Checkout of order {}: {} done", state.order.id, step.value)
        return result

    def _shipping_cost(self, state: CheckoutState) -> Money:
        if state.free_shipping:
            return Money.zero(state.order.currency)
        return self._fulfillment.calculate_shipping_cost(state.order)

    # --- Compensation ---------------------------------------------------------

    def _compensate(self, state: CheckoutState) -> None:
        steps = list(state.completed_steps)
        # Lines added before a failed reservation already hold stock.
        if state.current_step is CheckoutStep.RESERVE_STOCK and state.order.items:
            steps.append(CheckoutStep.RESERVE_STOCK)

        for step in reversed(steps):
            undo = self._compensations.get(step)
            if undo is None:
                if step is CheckoutStep.SCHEDULE_DELIVERY:
                    logger.warning(
                        "Delivery of order {} was scheduled and cannot be undone",
                        state.order.id,
                    )
                continue
            try:
                undo(state)
            except Exception:
                logger.exception("Compensating {} for order {} failed", step.value, state.order.id)
                continue
            state.compensated_steps.append(step)

    def _release_stock(self, state: CheckoutState) -> None:
        svc = StockAllocationService(self._product_catalog)
        svc.release_for_order(state.order)
        state.order.cancel()
        logger.warning("Released stock reserved by order {}", state.order.id)

    def _delete_order(self, state: CheckoutState) -> None:
        self._order_store.delete(state.order.id)
        logger.warning("Deleted persisted order {}", state.order.id)
