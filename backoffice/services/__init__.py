# Services package init
"""
Tienda Back Office — Services Layer
=====================================

What:  Data access and authentication logic, independent of HTTP.

Service Inventory:
    - ProductService: queries on `productos`
    - UserService:    queries on `usuarios`, password hashing on insert
    - AuthService:    credential check with equal-cost failure paths
    - SessionStore:   server-side session tokens
    - security:       bcrypt hash/verify helpers
"""
