"""
params-router - nested routing sample

This walks through an admin area where each screen only knows its own
part of the URL.
Run with: python sample.py
"""


import logging

from params_router import ClickEvent, MemoryHistory, ParamsRouter

# =============================================================================
# Application Setup
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
logger = logging.getLogger("params_router.sample")

router: ParamsRouter = ParamsRouter(
    history=MemoryHistory(["/admin/3/users?page=1"]),
)


# =============================================================================
# Scopes
# =============================================================================

# The admin screen owns "/admin/:adminId"
admin = router.routable("/admin/:adminId")

# The users screen owns "/users" and does not know it lives under /admin
users = admin.child("/users")

# The user detail owns its optional id and tab
detail = users.child({"params": ["userId", "tab"]})


def log_detail(scope) -> None:
    logger.info(
        "detail params=%s root_params=%s rest=%r",
        scope.params,
        scope.root_params,
        scope.rest,
    )


# =============================================================================
# Navigation
# =============================================================================


def main() -> None:
    unsubscribe = detail.subscribe(log_detail)

    # Keeps adminId=3 even though the detail scope never mentions it
    detail.scope.go_to({"userId": 42})
    logger.info("now at %s", router.location.url)

    # Links built by a scope carry the ancestor parameters too
    logger.info("profile link: %s", detail.scope.href({"userId": 42, "tab": "profile"}))

    # Bump the page while keeping everything else
    users.scope.go_to(lambda params: {**params, "page": params.get("page", 1) + 1})
    logger.info("params: %s", router.to_params(None, users.scope.pattern))

    # A link click handled in-app
    router.go_to(ClickEvent(href="/admin/3/users/7/settings"))

    unsubscribe()


if __name__ == "__main__":
    main()
