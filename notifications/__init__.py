"""Notifications app package

User-facing notifications: created by ``notifications.services``
(usually as a side effect of another user's action), pushed live over
the recipient's realtime channel, and tracked as read/unread.
"""
