"""Activity history app package

This app stores an append-only audit trail of actions taken by each
user (signing in, posting, commenting, profile changes, admin actions).
Entries are recorded through ``activity.services.ActivityRecorder`` as
a side effect of other apps' work, reference their subject via Django's
generic relationships, and are capped per user by a retention limit.
"""
