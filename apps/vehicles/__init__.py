"""Vehicles app package.

Fleet inventory: the vehicle model with its stored availability flag,
the inventory capability the booking ledger locks vehicle rows through,
and the public read / admin write endpoints.
"""
