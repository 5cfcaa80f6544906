import logging
from functools import wraps

from portal.middleware import get_identity
from portal.redirects import redirect_to_target
from portal.routing import RedirectTo, route

logger = logging.getLogger(__name__)


def area_required(area):
    """Guard a page view with the role router.

    Denied requests get a redirect; allowed ones reach the view with
    ``request.identity`` resolved.
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            identity = get_identity(request)
            decision = route(identity.kind if identity is not None else None, area)
            if isinstance(decision, RedirectTo):
                logger.debug(
                    "Routing %s (kind=%s area=%s) to %s",
                    request.path, getattr(identity, 'kind', None), area, decision.target
                )
                return redirect_to_target(request, decision.target)
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator
