"""
PostgreSQL Payment Repository.

Implements the repository pattern for Payment persistence with asyncpg.
Status changes are written with a compare-and-set on the previous status.
"""

from decimal import Decimal
from typing import Optional

import asyncpg
from asyncpg import Pool

from internal.domain.errors import DuplicateKeyError
from internal.domain.payment import Payment, PaymentMethod, PaymentStatus


_PAYMENT_COLUMNS = """
    id, cart_id, user_id, payment_method, amount, status,
    created_at, refunded_at, refund_amount
"""


class PostgresPaymentRepository:
    """
    PostgreSQL implementation of the Payment Repository.

    Uses asyncpg for async database operations.
    """

    def __init__(self, pool: Pool) -> None:
        """
        Initialize the repository.

        Args:
            pool: asyncpg connection pool.
        """
        self._pool = pool

    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        """
        Get a payment by ID.

        Args:
            payment_id: The ID of the payment.

        Returns:
            Payment if found, None otherwise.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_PAYMENT_COLUMNS} FROM payments WHERE id = $1",
                payment_id,
            )

            if not row:
                return None

            return self._row_to_entity(row)

    async def list_by_user(self, user_id: int) -> list[Payment]:
        """
        List payments of a user, newest first.

        Args:
            user_id: The paying user.

        Returns:
            List of payments (possibly empty).
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_PAYMENT_COLUMNS}
                FROM payments
                WHERE user_id = $1
                ORDER BY created_at DESC, id DESC
                """,
                user_id,
            )

            return [self._row_to_entity(row) for row in rows]

    async def exists_completed_for_cart(self, cart_id: int) -> bool:
        """Whether the cart already has a completed payment."""
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                """
                SELECT EXISTS(
                    SELECT 1 FROM payments WHERE cart_id = $1 AND status = $2
                )
                """,
                cart_id,
                PaymentStatus.COMPLETED.value,
            )

    async def save(self, payment: Payment) -> Payment:
        """
        Insert a new payment.

        Args:
            payment: The payment to create.

        Returns:
            The payment with its assigned ID.

        Raises:
            DuplicateKeyError: If the cart already has a completed payment.
        """
        async with self._pool.acquire() as conn:
            try:
                payment_id = await conn.fetchval(
                    """
                    INSERT INTO payments (
                        cart_id, user_id, payment_method, amount, status, created_at
                    ) VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING id
                    """,
                    payment.cart_id,
                    payment.user_id,
                    payment.payment_method.value,
                    payment.amount,
                    payment.status,
                    payment.created_at,
                )
            except asyncpg.UniqueViolationError as e:
                raise DuplicateKeyError(
                    "cart_id",
                    f"El carrito {payment.cart_id} ya tiene un pago completado",
                ) from e

        payment.id = payment_id
        return payment

    async def update_status_if(
        self,
        payment: Payment,
        expected_status: str,
    ) -> Optional[Payment]:
        """
        Write status and refund fields if the stored status is unchanged.

        Args:
            payment: Payment carrying the new state.
            expected_status: Status the stored row must still have.

        Returns:
            The stored payment, or None if another writer got there first.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE payments
                SET status = $2,
                    refunded_at = $3,
                    refund_amount = $4
                WHERE id = $1 AND status = $5
                RETURNING {_PAYMENT_COLUMNS}
                """,
                payment.id,
                payment.status,
                payment.refunded_at,
                payment.refund_amount,
                expected_status,
            )

            if not row:
                return None

            return self._row_to_entity(row)

    def _row_to_entity(self, row: asyncpg.Record) -> Payment:
        """
        Convert a database row to a Payment entity.

        Args:
            row: Database row.

        Returns:
            Payment entity.
        """
        refund_amount = row["refund_amount"]

        return Payment(
            id=row["id"],
            cart_id=row["cart_id"],
            user_id=row["user_id"],
            payment_method=PaymentMethod(row["payment_method"]),
            amount=Decimal(str(row["amount"])),
            status=row["status"],
            created_at=row["created_at"],
            refunded_at=row["refunded_at"],
            refund_amount=Decimal(str(refund_amount)) if refund_amount is not None else None,
        )
