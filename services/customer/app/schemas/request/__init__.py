from .CustomerSignUpSchema import CustomerSignUpSchema
from .CustomerLoginSchema import CustomerLoginSchema
from .TokenRefreshSchema import TokenRefreshSchema

__all__ = [
    "CustomerSignUpSchema",
    "CustomerLoginSchema",
    "TokenRefreshSchema",
]
