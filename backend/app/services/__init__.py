"""
HairBook Backend — Services Layer
===================================

What:  Business logic between the routes (HTTP) and the database.
How:   Stateless service classes exposed as module-level singletons; each
       call receives the request's AsyncSession and any collaborators.

Service Inventory:
    - PasswordHasher: bcrypt hashing and verification (passlib)
    - TokenService: issue and verify HS256 bearer tokens (PyJWT)
    - UserService: register, login, location reports, admin locations report
    - BookingService: create and list the caller's bookings
"""
