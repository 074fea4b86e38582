from studypro.models.user import User
from studypro.models.payment import Payment
from studypro.models.subscription import Subscription
from studypro.models.content import ContentItem

__all__ = ["User", "Payment", "Subscription", "ContentItem"]
