"""Bookings app package.

This app encapsulates the booking ledger: the booking model, the
booking aggregate and vehicle schedule, and the create / list /
transition use cases. Every write that touches a booking and its
vehicle runs in one database transaction with the vehicle row locked,
which is what keeps active bookings of a vehicle from overlapping.
"""
