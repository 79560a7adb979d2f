"""Per-request access decisions.

Every route carries an explicit ``RouteAccess`` record (see
``ideaboard.auth.policy``). A request passes through two independent
checkpoints:

1. authentication: skipped for public routes, otherwise the bearer token
   must verify and name a subject and username;
2. role check: only when the route declares required roles.

The resolved ``Principal`` is returned to the route handler, which passes it
explicitly to the service layer.
"""
import logging
from dataclasses import dataclass, field

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ideaboard.auth.tokens import TokenIssuer
from ideaboard.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    id: str
    username: str
    role: str


@dataclass(frozen=True)
class AccessRule:
    """Access settings declared at one level (router or handler).

    ``None`` means the level does not declare that setting.
    """

    public: bool | None = None
    roles: frozenset[str] | None = None


@dataclass(frozen=True)
class RouteAccess:
    public: bool = False
    required_roles: frozenset[str] = field(default_factory=frozenset)


def merge_rules(handler: AccessRule | None, controller: AccessRule | None) -> RouteAccess:
    """Resolve one route's access; handler-level values win over router-level ones."""
    handler = handler or AccessRule()
    controller = controller or AccessRule()

    public = handler.public if handler.public is not None else controller.public
    roles = handler.roles if handler.roles is not None else controller.roles
    return RouteAccess(public=bool(public), required_roles=frozenset(roles or ()))


def authenticate(token: str | None, issuer: TokenIssuer) -> Principal:
    if not token:
        raise Unauthenticated("Authentication token missing")

    claims = issuer.verify(token)
    if not claims.subject_id or not claims.username:
        raise Unauthenticated("Invalid token")
    return Principal(id=claims.subject_id, username=claims.username, role=claims.role or "")


def check_roles(principal: Principal | None, required_roles: frozenset[str]) -> None:
    if not required_roles:
        return
    if principal is None:
        raise Unauthenticated("Not authenticated; cannot check permissions")
    if principal.role not in required_roles:
        logger.warning(
            "Denied %s (role %s); requires one of %s",
            principal.username, principal.role, sorted(required_roles),
        )
        raise Forbidden("Access denied: your role does not allow this action")


def decide(access: RouteAccess, token: str | None, issuer: TokenIssuer) -> Principal | None:
    """Run both checkpoints. Public routes yield no principal."""
    principal = None
    if not access.public:
        principal = authenticate(token, issuer)
    check_roles(principal, access.required_roles)
    return principal


def guard(route_id: str):
    """FastAPI dependency enforcing the access record of ``route_id``."""
    from ideaboard.auth.policy import resolve_route_access

    access = resolve_route_access(route_id)

    def _dependency(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ) -> Principal | None:
        issuer: TokenIssuer = request.app.state.token_issuer
        token = credentials.credentials if credentials else None
        try:
            return decide(access, token, issuer)
        except Unauthenticated as exc:
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.detail)
            raise

    return _dependency
