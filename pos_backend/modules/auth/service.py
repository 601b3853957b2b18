import hashlib
import logging
import time
from supabase import Client
from pos_backend.config.settings import settings
from pos_backend.core.errors import AuthError, Unauthenticated
from pos_backend.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from typing import Dict, Any

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token).
# Only the identity is cached; memberships are always re-read by the policy engine.
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            user_metadata = {}
            if register_data.full_name:
                user_metadata["full_name"] = register_data.full_name

            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": user_metadata
                }
            })

            if not auth_response.user:
                raise AuthError("Failed to register user")

            session = auth_response.session
            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully",
                access_token=session.access_token if session else None,
            )
        except AuthError:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise AuthError("User already exists") from e
            logger.warning("Registration failed: %s", error_message)
            raise AuthError(f"Registration failed: {error_message}") from e

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise AuthError("Invalid email or password")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except AuthError:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise AuthError("Invalid email or password") from e
            logger.warning("Login failed: %s", error_message)
            raise AuthError(f"Login failed: {error_message}") from e

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        if not token:
            raise Unauthenticated()
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise Unauthenticated("Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + settings.auth_cache_ttl_seconds)
            return user_data
        except Unauthenticated:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise Unauthenticated("Invalid or expired token") from e
            raise Unauthenticated("Authentication failed") from e

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        _AUTH_USER_CACHE.pop(cache_key, None)
        try:
            # Revoke the caller's own refresh tokens; the shared client's
            # stored session belongs to whoever logged in last
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning("Sign out failed: %s", e)
            return False
