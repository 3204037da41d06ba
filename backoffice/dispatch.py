"""
Tienda Back Office — Query-String Dispatch Table
==================================================

What:  Maps (HTTP verb, resource, identifier shape) to a controller action.
Why:   All CRUD traffic enters through one endpoint, `/api?path=<resource>[/<id>]`.
       Keeping the rules in one ordered table makes them auditable and lets
       them be tested without an HTTP server.
How:   `resolve()` splits the `path` parameter, classifies the identifier,
       and walks ROUTE_TABLE in order. The first matching entry wins.

Resolution:

    path="products/42", GET
        │
        ▼  split_path()          → ("products", "42")
        ▼  classify_identifier() → IdShape.NUMERIC
        ▼  ROUTE_TABLE scan      → Route(GET, products, NUMERIC, GET)
        ▼
    RouteMatch(resource="products", action=Action.GET, identifier="42")

Path normalization:
    Surrounding slashes are stripped before splitting, so a trailing slash
    does not create an identifier: `products/` lists products instead of
    being answered as an invalid route. Segments after the second are
    ignored (`products/42/x` is `products/42`).

Failure precedence:
    1. unknown resource                          → UnknownResourceError (404)
    2. GET with an identifier the table rejects  → NotFoundError (404)
    3. anything else the table does not list     → MethodNotAllowedError (405)
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from backoffice.controllers.validation import is_numeric_id
from backoffice.exceptions import MethodNotAllowedError, NotFoundError, UnknownResourceError

PRODUCTS = "products"
USERS = "users"
SEARCH_TOKEN = "search"


class IdShape(Enum):
    """How the second path segment looks."""
    NONE = "none"         # products
    NUMERIC = "numeric"   # products/42
    SEARCH = "search"     # products/search
    OTHER = "other"       # products/abc


class Action(Enum):
    LIST = "list"
    GET = "get"
    SEARCH = "search"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Route:
    method: str
    resource: str
    shape: IdShape
    action: Action


@dataclass(frozen=True)
class RouteMatch:
    """Result of a successful resolution."""
    resource: str
    action: Action
    identifier: Optional[str]


# Checked top to bottom; keep the more specific shapes first
ROUTE_TABLE: Tuple[Route, ...] = (
    Route("GET", PRODUCTS, IdShape.NONE, Action.LIST),
    Route("GET", PRODUCTS, IdShape.NUMERIC, Action.GET),
    Route("GET", PRODUCTS, IdShape.SEARCH, Action.SEARCH),
    Route("POST", PRODUCTS, IdShape.NONE, Action.CREATE),
    Route("PUT", PRODUCTS, IdShape.NUMERIC, Action.UPDATE),
    Route("DELETE", PRODUCTS, IdShape.NUMERIC, Action.DELETE),

    Route("GET", USERS, IdShape.NONE, Action.LIST),
    Route("GET", USERS, IdShape.NUMERIC, Action.GET),
    Route("POST", USERS, IdShape.NONE, Action.CREATE),
    Route("PUT", USERS, IdShape.NUMERIC, Action.UPDATE),
    Route("DELETE", USERS, IdShape.NUMERIC, Action.DELETE),
)

RESOURCES = frozenset(route.resource for route in ROUTE_TABLE)


def split_path(path: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Split the `path` query parameter into (resource, identifier).

        "products"       → ("products", None)
        "products/"      → ("products", None)
        "/products/42/"  → ("products", "42")
        "products/42/x"  → ("products", "42")   extra segments ignored
        ""               → ("", None)
    """
    parts = (path or "").strip("/").split("/")
    resource = parts[0]
    identifier = parts[1] if len(parts) > 1 and parts[1] else None
    return resource, identifier


def classify_identifier(identifier: Optional[str]) -> IdShape:
    if identifier is None:
        return IdShape.NONE
    if is_numeric_id(identifier):
        return IdShape.NUMERIC
    if identifier == SEARCH_TOKEN:
        return IdShape.SEARCH
    return IdShape.OTHER


def allowed_methods(resource: str, shape: IdShape) -> List[str]:
    """Verbs the table accepts for this resource and identifier shape (for the Allow header)."""
    methods: List[str] = []
    for route in ROUTE_TABLE:
        if route.resource == resource and route.shape is shape and route.method not in methods:
            methods.append(route.method)
    return methods


def resolve(method: str, path: Optional[str]) -> RouteMatch:
    """
    Pick the single action for a request.

    Raises:
        UnknownResourceError: first segment is not a known resource (→ 404)
        NotFoundError: GET with an identifier no GET route accepts (→ 404)
        MethodNotAllowedError: verb/identifier combination not in the table (→ 405)
    """
    method = method.upper()
    resource, identifier = split_path(path)
    if resource not in RESOURCES:
        raise UnknownResourceError(resource)

    shape = classify_identifier(identifier)
    for route in ROUTE_TABLE:
        if route.method == method and route.resource == resource and route.shape is shape:
            return RouteMatch(resource=resource, action=route.action, identifier=identifier)

    if method == "GET" and identifier is not None:
        raise NotFoundError(
            resource="route",
            message="Invalid route",
            context={"path": path},
        )

    raise MethodNotAllowedError(
        allowed=allowed_methods(resource, shape),
        context={"method": method, "path": path},
    )
