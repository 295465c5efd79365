"""
Database models for the MiniBnB platform.

- Profile: user profile mirrored from the auth provider
- Listing: rentable property owned by a host
- CoHost: delegated access to a listing
- Booking: closed reservation period [check_in, check_out] on a listing
- Conversation, Message: guest-to-host messaging per listing
"""

from .booking import Booking
from .listing import CoHost, Listing
from .message import Conversation, Message
from .profile import Profile

__all__ = ["Booking", "CoHost", "Conversation", "Listing", "Message", "Profile"]
