"""
Service layer abstraction.

Each service wraps the SQL for one table.  Every method opens its own
cursor, so each call is an independent, time-bounded round trip.
"""
