from .CustomerResponse import CustomerResponse
from .TokenResponse import TokenResponse

__all__ = [
    "CustomerResponse",
    "TokenResponse",
]
