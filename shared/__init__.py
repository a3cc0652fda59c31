"""
Shared Kernel

Base domain classes, value objects, error taxonomy, unit of work and
message bus shared by the users, vehicles and bookings apps.
"""
