"""Security middleware: Basic Auth gate and cache control."""
import base64
import secrets

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from customer_api.config import get_settings
from customer_api.utils.error_result import error_result

# Paths exempt from Basic Auth
OPEN_PATHS = ("/health", "/docs", "/openapi.json", "/redoc")


class SecurityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        settings = get_settings()
        path = request.url.path

        # --- Basic Auth gate (skip for open paths) ---
        if settings.api_user and settings.api_pass:
            if not any(path.startswith(p) for p in OPEN_PATHS):
                if not self._check_basic_auth(request, settings):
                    response = error_result("authorization", "not authenticated", 401)
                    response.headers["WWW-Authenticate"] = 'Basic realm="Customer API"'
                    return response

        response: Response = await call_next(request)

        # API data: clients may store but must revalidate each time
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            response.headers["Cache-Control"] = "private, no-cache"

        return response

    @staticmethod
    def _check_basic_auth(request: Request, settings) -> bool:
        auth_header = request.headers.get("authorization", "")
        if not auth_header.startswith("Basic "):
            return False
        try:
            decoded = base64.b64decode(auth_header[6:]).decode("utf-8")
            user, password = decoded.split(":", 1)
        except (ValueError, UnicodeDecodeError):
            return False
        # compare_digest only accepts ASCII str, so compare the UTF-8 bytes
        user_ok = secrets.compare_digest(user.encode("utf-8"), settings.api_user.encode("utf-8"))
        pass_ok = secrets.compare_digest(password.encode("utf-8"), settings.api_pass.encode("utf-8"))
        return user_ok and pass_ok
