from ideaboard.auth.access import AccessRule, RouteAccess, merge_rules
from ideaboard.models.user import Role

ADMIN_ONLY = frozenset({Role.ADMIN.value})

# Router-level defaults, keyed by the prefix of the route id
CONTROLLER_RULES: dict[str, AccessRule] = {
    "auth": AccessRule(public=True),
    "ideas": AccessRule(public=False),
    "users": AccessRule(public=False),
}

# Route-level settings; these override the router defaults
HANDLER_RULES: dict[str, AccessRule] = {
    "auth.signup": AccessRule(),
    "auth.login": AccessRule(),
    "ideas.list": AccessRule(public=True),
    "ideas.create": AccessRule(),
    "ideas.vote": AccessRule(),
    "ideas.report": AccessRule(),
    "ideas.update_title": AccessRule(),
    "ideas.delete": AccessRule(),
    "users.list": AccessRule(roles=ADMIN_ONLY),
    "users.update_role": AccessRule(roles=ADMIN_ONLY),
    "users.my_votes": AccessRule(),
}


def resolve_route_access(route_id: str) -> RouteAccess:
    """Access record for ``route_id``. Raises KeyError for unknown routes."""
    handler = HANDLER_RULES[route_id]
    controller = CONTROLLER_RULES.get(route_id.split(".", 1)[0])
    return merge_rules(handler, controller)
