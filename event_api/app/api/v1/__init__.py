"""
Version 1 of the API.

Bundles the auth, event and attendee endpoints served under
``/api/v1``.
"""
