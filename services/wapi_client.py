"""
Infoblox NIOS WAPI Client
Handles basic authentication and REST calls against an Infoblox grid master
"""

import os
import time
from typing import Any

import pybreaker
import requests
import structlog
import urllib3
from dotenv import load_dotenv

load_dotenv()

# Initialize structured logger
logger = structlog.get_logger(__name__)

DEFAULT_WAPI_VERSION = "2.12"
REQUIRED_ENV_VARS = ("INFOBLOX_HOST", "INFOBLOX_USERNAME", "INFOBLOX_PASSWORD")


class InfobloxAPIError(Exception):
    """Raised when a WAPI request fails or the grid answers with a non-2xx status"""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# Circuit Breaker Listener for logging state changes
class CircuitBreakerListener(pybreaker.CircuitBreakerListener):
    """Logs circuit breaker state changes"""

    def state_change(self, cb, old_state, new_state):
        """Called when circuit breaker changes state"""
        logger.warning(
            "circuit_breaker_state_change",
            name=cb.name,
            old_state=getattr(old_state, "name", str(old_state)),
            new_state=getattr(new_state, "name", str(new_state)),
            fail_counter=cb.fail_counter,
            failure_threshold=cb.fail_max,
        )

    def failure(self, cb, exc):
        """Called when a call fails"""
        logger.debug(
            "circuit_breaker_failure",
            name=cb.name,
            exception=str(exc),
            fail_counter=cb.fail_counter,
            failure_threshold=cb.fail_max,
        )


def _is_client_error(exc: Exception) -> bool:
    """4xx answers mean the grid is healthy and the request was wrong."""
    if not isinstance(exc, requests.exceptions.HTTPError):
        return False
    resp = exc.response
    return resp is not None and 400 <= resp.status_code < 500


def _env_flag(name: str, default: bool = True) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() != "false"


class InfobloxClient:
    """Client for the Infoblox NIOS WAPI"""

    def __init__(
        self,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        wapi_version: str | None = None,
        allow_self_signed: bool | None = None,
        timeout: tuple[float, float] = (5, 30),
        fail_max: int = 5,
        reset_timeout: int = 60,
    ):
        """
        Initialize WAPI client

        Args:
            host: Grid master hostname or IP (defaults to INFOBLOX_HOST env var)
            username: WAPI user (defaults to INFOBLOX_USERNAME env var)
            password: WAPI password (defaults to INFOBLOX_PASSWORD env var)
            wapi_version: WAPI version (defaults to INFOBLOX_WAPI_VERSION env var or 2.12)
            allow_self_signed: Skip TLS verification (defaults to INFOBLOX_ALLOW_SELF_SIGNED != "false")
            timeout: (connect timeout, read timeout) in seconds
            fail_max: Consecutive server-side failures before the circuit opens
            reset_timeout: Seconds before an open circuit lets a trial call through
        """
        self.host = host or os.getenv("INFOBLOX_HOST")
        self.username = username or os.getenv("INFOBLOX_USERNAME")
        password = password or os.getenv("INFOBLOX_PASSWORD")

        if not (self.host and self.username and password):
            raise ValueError(f"Missing required environment variables: {', '.join(REQUIRED_ENV_VARS)}")

        self.wapi_version = wapi_version or os.getenv("INFOBLOX_WAPI_VERSION") or DEFAULT_WAPI_VERSION
        if allow_self_signed is None:
            allow_self_signed = _env_flag("INFOBLOX_ALLOW_SELF_SIGNED")
        self.verify_tls = not allow_self_signed

        host_url = self.host.rstrip("/")
        if not host_url.startswith(("http://", "https://")):
            host_url = f"https://{host_url}"
        self.base_url = f"{host_url}/wapi/v{self.wapi_version}"

        self.session = requests.Session()
        self.session.auth = (self.username, password)
        self.session.verify = self.verify_tls
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

        if not self.verify_tls:
            # Grid masters commonly ship with a self-signed certificate
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.timeout = timeout

        self.breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            exclude=[_is_client_error],
            throw_new_error_on_trip=False,
            listeners=[CircuitBreakerListener()],
            name="infoblox_wapi",
        )

        logger.info(
            "infoblox_client_initialized",
            base_url=self.base_url,
            wapi_version=self.wapi_version,
            verify_tls=self.verify_tls,
            timeout_connect=self.timeout[0],
            timeout_read=self.timeout[1],
        )

    def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make HTTP request to the WAPI with circuit breaker protection

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Object type or object reference (e.g., record:a or network/ZG5z...)
            body: JSON body, sent for POST and PUT only
            params: Query parameters

        Returns:
            Decoded JSON when the grid answers with JSON, raw text otherwise

        Raises:
            InfobloxAPIError: If the circuit is open, the request fails or the status is not 2xx
        """
        method = method.upper()
        url = f"{self.base_url}/{path}"
        start_time = time.time()

        kwargs: dict[str, Any] = {"timeout": self.timeout}
        if params:
            kwargs["params"] = params
        if body and method in ("POST", "PUT"):
            kwargs["json"] = body
        if method == "DELETE":
            # DELETE has no body; a None value removes the session-level Content-Type
            kwargs["headers"] = {"Content-Type": None}

        @self.breaker
        def _make_request():
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
            return response

        try:
            response = _make_request()
        except pybreaker.CircuitBreakerError as e:
            logger.error(
                "circuit_breaker_open",
                message="Infoblox WAPI circuit breaker is OPEN - grid appears to be down",
                breaker_name=self.breaker.name,
            )
            raise InfobloxAPIError(
                "Infoblox API is currently unavailable (circuit breaker open). "
                f"Calls resume after {self.breaker.reset_timeout} seconds."
            ) from e
        except requests.exceptions.HTTPError as e:
            resp = e.response
            status_code = resp.status_code if resp is not None else None
            text = resp.text if resp is not None else str(e)
            logger.warning(
                "wapi_request_failed",
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=round((time.time() - start_time) * 1000, 1),
            )
            raise InfobloxAPIError(f"Infoblox API error ({status_code}): {text}", status_code, text) from e
        except requests.exceptions.RequestException as e:
            logger.warning(
                "wapi_request_failed",
                method=method,
                path=path,
                error=type(e).__name__,
                duration_ms=round((time.time() - start_time) * 1000, 1),
            )
            raise InfobloxAPIError(f"Request failed: {e}") from e

        logger.debug(
            "wapi_request",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.time() - start_time) * 1000, 1),
        )

        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type and response.text.strip():
            return response.json()
        return response.text

    # ==================== Object Methods ====================

    def get(self, object_type: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Search objects of a type (e.g., record:a, network, zone_auth)"""
        return self._request("GET", object_type, params=params)

    def get_by_ref(self, ref: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Read a single object by its reference"""
        return self._request("GET", ref, params=params)

    def create(self, object_type: str, data: dict[str, Any]) -> str:
        """Create an object; the grid answers with the new object reference"""
        return self._request("POST", object_type, body=data)

    def update(self, ref: str, data: dict[str, Any]) -> str:
        """Update fields of an object; the grid answers with the (possibly new) reference"""
        return self._request("PUT", ref, body=data)

    def delete(self, ref: str) -> str:
        """Delete an object by reference"""
        return self._request("DELETE", ref)

    def call_function(self, ref: str, function_name: str, data: dict[str, Any] | None = None) -> Any:
        """
        Call a WAPI object function

        Args:
            ref: Object reference the function runs against (e.g., network/ZG5z... or grid/b25l...)
            function_name: Function name (e.g., next_available_ip, restartservices)
            data: Function arguments sent as the JSON body
        """
        return self._request("POST", ref, body=data, params={"_function": function_name})
