# Models package init: importing the package registers every table on Base.metadata
from backoffice.models.product import Product
from backoffice.models.user import User

__all__ = ["Product", "User"]
