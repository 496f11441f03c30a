"""
HairBook Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:    GET  /                          (plain-text liveness)
                    GET  /health                    (database check)
    - auth.py:      POST /api/register
                    POST /api/login
    - location.py:  POST /api/location              (bearer)
    - bookings.py:  POST /api/bookings              (bearer)
                    GET  /api/bookings              (bearer)
    - admin.py:     GET  /api/admin/users-locations (bearer + admin)

Routes stay THIN: extract input, call the service, return its result.
Business rules live in app.services; access checks in app.middleware.auth.
"""
