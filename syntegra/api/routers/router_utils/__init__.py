"""Router utilities."""

from syntegra.api.routers.router_utils.error_handling import error_detail, handle_portal_errors

__all__ = ["error_detail", "handle_portal_errors"]
