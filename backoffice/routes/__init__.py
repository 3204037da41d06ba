# Routes package init
"""
Tienda Back Office — HTTP Routes Package
==========================================

Route Inventory:
    - api.py:     GET|POST|PUT|DELETE /api?path=...   (products and users CRUD)
    - auth.py:    POST /api/login, GET|POST /logout, GET /menu
    - health.py:  GET /health

Routes stay thin: they read the request (query, cookies, body) and hand it
to a controller. Routing decisions for /api live in backoffice.dispatch.
"""
