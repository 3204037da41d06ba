"""
Tienda Back Office — Authentication Controller
================================================

What:  Login, logout and the session-gated user menu.
How:   Credentials are checked by AuthService; sessions live in the
       SessionStore passed in by the route, and the browser only receives
       the opaque token in an HttpOnly cookie.

States:
    anonymous ──(login ok)──▶ authenticated ──(logout / expiry)──▶ anonymous
"""

import html
import logging
from typing import Any, Optional

from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.config import settings
from backoffice.exceptions import ValidationError
from backoffice.services.auth_service import AuthService, auth_service
from backoffice.services.session_store import SessionStore

logger = logging.getLogger(__name__)

_MENU_TEMPLATE = """<!DOCTYPE html>
<html lang="es">
<head>
  <meta charset="UTF-8">
  <title>Menú de Usuario</title>
</head>
<body>
  <div class="container">
    <h2>Bienvenido, {name}</h2>
    <a href="crear_producto.html" class="btn">Registrar Producto</a>
    <a href="listar_productos.html" class="btn">Ver Productos</a>
    <a href="listar_usuarios.html" class="btn">Ver Usuarios</a>
    <a href="/logout" class="btn">Cerrar Sesión</a>
  </div>
</body>
</html>
"""


def _credential(body: Any, key: str) -> str:
    value = body.get(key) if isinstance(body, dict) else None
    return value if isinstance(value, str) else ""


class AuthController:

    def __init__(self, service: AuthService = auth_service):
        self.service = service

    async def login(
        self,
        db: AsyncSession,
        body: Any,
        sessions: SessionStore,
        current_token: Optional[str] = None,
    ) -> JSONResponse:
        """
        Raises:
            ValidationError: email or password missing or empty (→ 400)
            AuthenticationError: credentials rejected (→ 401)
        """
        email = _credential(body, "email").strip()
        password = _credential(body, "password")
        if not email or not password:
            raise ValidationError(message="Email and password are required")

        user = await self.service.authenticate(db, email, password)

        # A fresh token on every login; whatever session came with the request is dropped
        sessions.delete(current_token)
        token = sessions.create(user.id, user.full_name)

        response = JSONResponse(
            status_code=200,
            content={
                "mensaje": "Authentication successful",
                "user": {"id": user.id, "full_name": user.full_name},
            },
        )
        response.set_cookie(
            key=settings.session_cookie_name,
            value=token,
            max_age=settings.session_ttl_seconds,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )
        return response

    def logout(self, sessions: SessionStore, token: Optional[str]) -> Response:
        sessions.delete(token)
        response = RedirectResponse(url=settings.landing_url, status_code=302)
        response.delete_cookie(settings.session_cookie_name)
        return response

    def menu(self, sessions: SessionStore, token: Optional[str]) -> Response:
        session = sessions.get(token)
        if session is None:
            return RedirectResponse(url=settings.login_url, status_code=302)
        return HTMLResponse(_MENU_TEMPLATE.format(name=html.escape(session.display_name)))


auth_controller = AuthController()
