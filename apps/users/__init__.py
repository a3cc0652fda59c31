"""Users app package.

Defines the custom user model (email login, ``admin`` / ``customer``
roles), signup and signin endpoints issuing JWTs, admin user management
and the pure access policy consumed by the vehicles and bookings apps.
Use ``apps.users.models.User`` as the AUTH_USER_MODEL.
"""
