# ==============================================================================
# EXTERNAL CLIENTS PACKAGE
# ==============================================================================
# HTTP clients for the payment provider and image storage
# ==============================================================================

from thinklock.clients.image_storage import ImageStorage
from thinklock.clients.payment_gateway import PaymentGateway

__all__ = ["ImageStorage", "PaymentGateway"]
