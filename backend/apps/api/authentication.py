from rest_framework.authentication import SessionAuthentication
from rest_framework.exceptions import PermissionDenied

from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="authentication")


class CsrfSessionAuthentication(SessionAuthentication):
    """
    CSRF protection for anonymous, cookie-bound sessions.

    Visitors never log in, but their cart rides on the session cookie, so
    unsafe methods must carry the CSRF token. The request always stays
    anonymous.
    """

    def authenticate(self, request):
        # Check the Django request so the body stays unread for the view.
        try:
            self.enforce_csrf(request._request)
        except PermissionDenied:
            logger.info(
                "Request rejected by CSRF check",
                method=request.method,
                path=request.path,
            )
            raise
        return None
