import asyncio
from typing import Callable

from sqlalchemy import Boolean, DateTime, Integer, String, bindparam, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from libs.common import ensure_kst, now_kst, to_naive_kst
from libs.schemas import Customer

from services.customer.app.core.LoginService import PhoneConflictError
from services.customer.app.db.session import SessionLocal


_CUSTOMER_COLUMNS = {
    "customer_id": Integer,
    "nickname": String,
    "phone": String,
    "password_hash": String,
    "phone_authenticated": Boolean,
    "created_at": DateTime,
}


def _to_customer(row) -> Customer:
    return Customer(
        customerId=row["customer_id"],
        nickname=row["nickname"],
        phone=row["phone"],
        passwordHash=row["password_hash"],
        phoneAuthenticated=bool(row["phone_authenticated"]),
        createdAt=ensure_kst(row["created_at"]),
    )


def _is_phone_conflict(exc: IntegrityError) -> bool:
    """uq_customers_phone 위반인지 확인 (NOT NULL 등 다른 제약 위반은 False)"""
    message = str(exc.orig)
    # MySQL: Duplicate entry ... for key 'uq_customers_phone'
    # SQLite: UNIQUE constraint failed: customers.phone
    return "uq_customers_phone" in message or "UNIQUE constraint failed: customers.phone" in message


class _SQLRepositoryBase:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    async def _run_in_thread(self, func: Callable[[], Customer | int | None | bool]):
        return await asyncio.to_thread(func)


class SQLAlchemyCustomerRepository(_SQLRepositoryBase):
    async def phone_exists(self, phone: str) -> bool:
        """customers 테이블에 해당 전화번호가 등록되어 있는지 확인"""
        def _query():
            with self._session_factory() as session:
                result = session.execute(
                    text(
                        """
                        SELECT EXISTS(
                            SELECT 1
                            FROM customers
                            WHERE phone = :phone
                        ) AS exists_flag
                        """
                    ),
                    {"phone": phone},
                ).scalar()
                return bool(result)

        return await self._run_in_thread(_query)

    async def find_customer_by_phone(self, phone: str) -> Customer | None:
        def _query():
            with self._session_factory() as session:
                row = (
                    session.execute(
                        text(
                            """
                            SELECT
                                customer_id,
                                nickname,
                                phone,
                                password_hash,
                                phone_authenticated,
                                created_at
                            FROM customers
                            WHERE phone = :phone
                            LIMIT 1
                            """
                        ).columns(**_CUSTOMER_COLUMNS),
                        {"phone": phone},
                    )
                    .mappings()
                    .first()
                )
                if row is None:
                    return None
                return _to_customer(row)

        return await self._run_in_thread(_query)

    async def find_customer_by_id(self, customer_id: int) -> Customer | None:
        def _query():
            with self._session_factory() as session:
                row = (
                    session.execute(
                        text(
                            """
                            SELECT
                                customer_id,
                                nickname,
                                phone,
                                password_hash,
                                phone_authenticated,
                                created_at
                            FROM customers
                            WHERE customer_id = :customer_id
                            LIMIT 1
                            """
                        ).columns(**_CUSTOMER_COLUMNS),
                        {"customer_id": customer_id},
                    )
                    .mappings()
                    .first()
                )
                if row is None:
                    return None
                return _to_customer(row)

        return await self._run_in_thread(_query)

    async def save_customer(
        self,
        nickname: str,
        phone: str,
        password_hash: str,
        phone_authenticated: bool,
    ) -> Customer:
        """
        고객을 저장하고 저장된 엔티티를 반환합니다.

        Raises:
            PhoneConflictError: uq_customers_phone 제약 위반 (동시 가입)
        """
        created_at = now_kst()

        def _insert():
            with self._session_factory() as session:
                try:
                    result = session.execute(
                        text(
                            """
                            INSERT INTO customers (
                                nickname,
                                phone,
                                password_hash,
                                phone_authenticated,
                                created_at
                            ) VALUES (
                                :nickname,
                                :phone,
                                :password_hash,
                                :phone_authenticated,
                                :created_at
                            )
                            """
                        ).bindparams(
                            bindparam("phone_authenticated", type_=Boolean),
                            bindparam("created_at", type_=DateTime),
                        ),
                        {
                            "nickname": nickname,
                            "phone": phone,
                            "password_hash": password_hash,
                            "phone_authenticated": phone_authenticated,
                            "created_at": to_naive_kst(created_at),
                        },
                    )
                    customer_id = result.lastrowid
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    if _is_phone_conflict(exc):
                        raise PhoneConflictError("이미 등록된 전화번호입니다.") from exc
                    raise
                return customer_id

        customer_id = await self._run_in_thread(_insert)

        return Customer(
            customerId=customer_id,
            nickname=nickname,
            phone=phone,
            passwordHash=password_hash,
            phoneAuthenticated=phone_authenticated,
            createdAt=created_at,
        )
