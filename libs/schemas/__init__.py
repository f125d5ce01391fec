from libs.schemas.customer import Customer

__all__ = [
    "Customer",
]
