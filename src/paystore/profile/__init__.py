"""
Profile

Merchant-facing payment profiles, looked up by key; a profile fixes the
currency its transactions are charged in.
"""

from paystore.profile.repository import (
    OrderedMapProfileStore,
    PGPoolProfileStore,
    profile_by_id,
    profile_by_key,
    profiles_with_limit_and_offset,
)

__all__ = [
    "OrderedMapProfileStore",
    "PGPoolProfileStore",
    "profile_by_id",
    "profile_by_key",
    "profiles_with_limit_and_offset",
]
