"""AttenTrack package.

Classroom attendance tracking organized by feature modules (students,
attendance, reports) on top of a storage layer that serves every call from
MySQL when it is reachable and from a local key-value store otherwise.
"""
