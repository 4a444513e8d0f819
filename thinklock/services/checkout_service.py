# ==============================================================================
# CHECKOUT SERVICE - Payment, Orders & Enrollment Finalization
# ==============================================================================
# Payment intent creation, payment-verified order placement and the
# one-shot enrollment finalization of paid courses
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List

from thinklock.clients.payment_gateway import PaymentGateway
from thinklock.core.constants import ErrorMessages
from thinklock.core.exceptions import (
    AlreadyExistsError,
    BusinessRuleError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)
from thinklock.core.settings import settings
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter
from thinklock.database.repositories.account_repository import AccountRepository
from thinklock.database.repositories.basket_repository import BasketRepository
from thinklock.database.repositories.course_repository import CourseRepository
from thinklock.database.repositories.order_repository import OrderRepository
from thinklock.schemas.order import (
    EnrollmentResponse,
    OrderCreate,
    OrderResponse,
    PaymentIntentResponse,
)
from thinklock.services.base_service import BaseService
from thinklock.services.basket_service import BasketService
from thinklock.utils.helpers import to_minor_units, unique_in_order, utc_now

logger = logging.getLogger(__name__)

INTENT_SUCCEEDED = "succeeded"


class CheckoutService(BaseService):
    """
    Checkout service.

    Flow:
        1. ``create_payment_intent`` charges the basket's paid balance
        2. ``place_order`` records a paid order and empties the basket
        3. ``finalize_enrollment`` consumes a paid order once, adding
           the courses to the student and counting the purchases

    Amounts are always computed from stored course prices; client
    supplied totals are never trusted.
    """

    def __init__(self, adapter: MongoDBAdapter, gateway: PaymentGateway) -> None:
        super().__init__(adapter)
        self._gateway = gateway
        self._baskets = BasketRepository(adapter)
        self._basket_service = BasketService(adapter)
        self._courses = CourseRepository(adapter)
        self._orders = OrderRepository(adapter)
        self._accounts = AccountRepository(adapter)

    async def _basket_amount(self, student_id: str) -> int:
        """Basket paid balance in minor currency units; BusinessRuleError when nothing is due."""
        balance = await self._basket_service.paid_balance(student_id)
        if balance <= 0:
            raise BusinessRuleError(
                message=ErrorMessages.EMPTY_BASKET,
                rule="basket_not_empty",
            )
        return to_minor_units(balance)

    # ==========================================================================
    # PAYMENT
    # ==========================================================================

    async def create_payment_intent(self, student_id: str) -> PaymentIntentResponse:
        """
        Create a card payment intent for the student's basket.

        Raises:
            BusinessRuleError: If the basket is empty or free
            ServiceUnavailableError: If the payment provider fails
        """
        amount = await self._basket_amount(student_id)
        currency = settings.PAYMENT_CURRENCY

        intent = await self._gateway.create_intent(
            amount, currency, metadata={"student_id": student_id}
        )
        logger.info(f"Payment intent {intent.get('id')} created for {student_id}: {amount} {currency}")

        return PaymentIntentResponse(
            client_secret=intent["client_secret"],
            payment_intent_id=intent["id"],
            amount=amount,
            currency=currency,
        )

    # ==========================================================================
    # ORDERS
    # ==========================================================================

    async def place_order(self, student_id: str, schema: OrderCreate) -> OrderResponse:
        """
        Record a paid order for the basket and delete the basket.

        The payment intent must have succeeded, belong to the student
        and charge exactly the basket's paid balance.

        Raises:
            BusinessRuleError: If the basket is empty
            PaymentRequiredError: If the payment cannot be verified
            AlreadyExistsError: If the payment intent was already used
        """
        basket = await self._baskets.get(student_id)
        course_ids: List[str] = list((basket or {}).get("courses") or [])
        if not course_ids:
            raise BusinessRuleError(message=ErrorMessages.EMPTY_BASKET, rule="basket_not_empty")

        amount = await self._basket_amount(student_id)
        intent = await self._gateway.retrieve_intent(schema.payment_intent_id)
        self._verify_intent(intent, student_id, amount)

        courses = await self._courses.get_many(course_ids, projection={"name": 1, "price": 1})
        by_id = {c["id"]: c for c in courses}

        order: Dict[str, Any] = {
            "student_id": student_id,
            "courses": course_ids,
            "items": [
                {"id": i, "name": by_id[i].get("name"), "price": by_id[i].get("price", 0)}
                for i in course_ids if i in by_id
            ],
            "payment": {
                "intent_id": intent["id"],
                "amount": intent["amount"],
                "currency": intent.get("currency", settings.PAYMENT_CURRENCY),
                "status": intent["status"],
            },
            "email": schema.email,
            "name": schema.name,
            "date": utc_now(),
            "finalized": False,
            "finalized_courses": [],
            "finalized_at": None,
        }

        try:
            created = await self._orders.create(order)
        except AlreadyExistsError:
            raise AlreadyExistsError(
                message=ErrorMessages.INTENT_REUSED,
                resource_type="order",
                details={"payment_intent_id": schema.payment_intent_id},
            )

        await self._baskets.delete(student_id)
        logger.info(f"Order {created['id']} placed by {student_id} for {len(course_ids)} course(s)")
        return self._to_response(OrderResponse, created)

    @staticmethod
    def _verify_intent(intent: Any, student_id: str, amount: int) -> None:
        if not intent:
            raise PaymentRequiredError(message="Payment intent not found")
        if intent.get("status") != INTENT_SUCCEEDED:
            raise PaymentRequiredError(
                details={"payment_status": intent.get("status")},
            )
        if (intent.get("metadata") or {}).get("student_id") != student_id:
            raise PaymentRequiredError(message="Payment intent belongs to another account")
        if intent.get("amount") != amount:
            raise PaymentRequiredError(
                message="Payment amount does not match the basket",
                details={"expected": amount, "paid": intent.get("amount")},
            )

    async def list_orders(self, student_id: str) -> List[OrderResponse]:
        """Orders of the student, newest first."""
        return self._to_responses(OrderResponse, await self._orders.list_for_student(student_id))

    # ==========================================================================
    # ENROLLMENT FINALIZATION
    # ==========================================================================

    async def finalize_enrollment(
        self,
        student_id: str,
        course_ids: List[str],
    ) -> EnrollmentResponse:
        """
        Enroll the student in paid courses.

        Claims the ids on one paid order of the student, takes one seat
        on each course and adds the ids to the student's courses. An
        order may be finalized in several calls, but each of its courses
        only once. Seats are taken with a conditional increment, so
        ``purchase`` never exceeds ``seat``.

        The writes share a transaction when enabled; otherwise a failed
        step gives back the seats and the order claim it already made.

        Args:
            student_id: Enrolling student
            course_ids: Courses to finalize (duplicates ignored)

        Returns:
            Finalized ids and the student's full enrolled list

        Raises:
            ValidationError: If no course ids are given
            NotFoundError: If a course does not exist
            BusinessRuleError: If a course is full or no paid order covers the ids
        """
        ids = unique_in_order(course_ids)
        if not ids:
            raise ValidationError(
                message="At least one course id is required",
                errors={"courses": "empty"},
            )

        courses = await self._courses.get_many(ids, projection={"seat": 1, "purchase": 1})
        found = {c["id"]: c for c in courses}
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(
                message=ErrorMessages.COURSE_NOT_FOUND,
                resource_type="course",
                resource_id=", ".join(missing),
            )

        full = [i for i in ids if found[i].get("purchase", 0) >= found[i].get("seat", 0)]
        if full:
            raise self._course_full(full)

        async with self._adapter.transaction() as session:
            order = await self._orders.claim_courses(student_id, ids, session=session)
            if order is None:
                raise BusinessRuleError(
                    message=ErrorMessages.NO_COVERING_ORDER,
                    rule="paid_order_required",
                    details={"courses": ids},
                )

            seated: List[str] = []
            try:
                for course_id in ids:
                    if not await self._courses.claim_seat(course_id, session=session):
                        raise self._course_full([course_id])
                    seated.append(course_id)
                await self._accounts.add_courses(student_id, ids, session=session)
                await self._orders.complete_if_covered(order, session=session)
            except Exception:
                if session is None:
                    await self._release(order["id"], ids, seated)
                raise

        account = await self._accounts.get_by_id(student_id, projection={"courses": 1}) or {}
        logger.info(f"Student {student_id} enrolled in {ids} via order {order['id']}")

        return EnrollmentResponse(
            order_id=order["id"],
            enrolled=ids,
            courses=account.get("courses", []),
        )

    @staticmethod
    def _course_full(course_ids: List[str]) -> BusinessRuleError:
        return BusinessRuleError(
            message=ErrorMessages.COURSE_FULL,
            rule="free_seat",
            details={"courses": course_ids},
        )

    async def _release(self, order_id: str, course_ids: List[str], seated: List[str]) -> None:
        """Undo a partial finalization made without a transaction."""
        logger.warning(f"Rolling back finalization of {course_ids} on order {order_id}")
        for course_id in seated:
            await self._courses.release_seat(course_id)
        await self._orders.release_courses(order_id, course_ids)
