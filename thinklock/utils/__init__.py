# ==============================================================================
# UTILITIES PACKAGE
# ==============================================================================

from thinklock.utils.helpers import ceil_amount, to_minor_units, unique_in_order, utc_now

__all__ = ["ceil_amount", "to_minor_units", "unique_in_order", "utc_now"]
