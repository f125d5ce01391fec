from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("customer_id", Integer, primary_key=True, autoincrement=True),
    Column("nickname", String(50), nullable=False),
    Column("phone", String(20), nullable=False),
    Column("password_hash", String(100), nullable=False),
    Column("phone_authenticated", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False),
    # 동시 가입 요청에서도 전화번호 중복을 막는 최종 방어선
    UniqueConstraint("phone", name="uq_customers_phone"),
)


def create_tables(bind: Engine) -> None:
    """customers 테이블이 없으면 생성합니다."""
    metadata.create_all(bind)
