"""
Tienda Back Office — Controllers Package
==========================================

What:  Translate HTTP-shaped input into service calls and service results
       into JSON responses.

Controller Inventory:
    - ProductController: list/get/create/update/delete/search on products
    - UserController:    list/get/create/update/delete on users
    - AuthController:    login, logout, session-gated menu

Controllers raise typed exceptions (backoffice.exceptions) for every
failure; the handlers in main.py render them.
"""
