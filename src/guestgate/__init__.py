"""GuestGate - event check-in with access-code roles.

Staff, reception and admins join by signing up with the access code of
their role; every data access is then checked against a per-table policy.
"""

__version__ = "0.1.0"

from guestgate.infrastructure.api.app import app

__all__ = ["app", "__version__"]
