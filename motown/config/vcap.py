"""
Cloud Foundry service-binding overlay.

When the app runs on a platform that injects ``VCAP_SERVICES``, the
platform's port assignment and bound redis credentials replace whatever
the config files and environment said.
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from .errors import PlatformOverlayError
from .schema import ConfigSchema

logger = logging.getLogger(__name__)

VCAP_SERVICES_VAR = "VCAP_SERVICES"
VCAP_APP_PORT_VAR = "VCAP_APP_PORT"
REDIS_SERVICE_KEY = "redis-2.2"


def parse_vcap_services(raw: str) -> Dict[str, Any]:
    """
    Parse the VCAP_SERVICES JSON blob.

    Raises:
        PlatformOverlayError: If the blob is not a JSON object
    """
    try:
        services = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PlatformOverlayError(f"{VCAP_SERVICES_VAR} is not valid JSON: {e}") from e
    if not isinstance(services, dict):
        raise PlatformOverlayError(
            f"{VCAP_SERVICES_VAR} must be a JSON object, got: {type(services).__name__}"
        )
    return services


def redis_credentials(services: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the credentials of the first bound redis service."""
    bindings = services.get(REDIS_SERVICE_KEY)
    if not bindings:
        raise PlatformOverlayError(f"{VCAP_SERVICES_VAR} has no '{REDIS_SERVICE_KEY}' service binding")

    try:
        credentials = bindings[0]["credentials"]
        return {
            "host": credentials["hostname"],
            "port": credentials["port"],
            "password": credentials.get("password"),
        }
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise PlatformOverlayError(
            f"Malformed '{REDIS_SERVICE_KEY}' binding in {VCAP_SERVICES_VAR}: missing {e}"
        ) from e


def platform_overrides(
    config: ConfigSchema, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Compute the overrides the platform imposes on a validated configuration.

    Returns an empty dict when VCAP_SERVICES is not set. Otherwise returns
    nested overrides for ``bind_to.port`` (when VCAP_APP_PORT is set) and,
    unless ``redis.ignore_vcap_service_creds`` is true, for the redis
    host, port and password.

    Raises:
        PlatformOverlayError: If the binding JSON is malformed or lacks the redis entry
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(VCAP_SERVICES_VAR)
    if raw is None:
        return {}

    services = parse_vcap_services(raw)
    overrides: Dict[str, Any] = {}

    app_port = environ.get(VCAP_APP_PORT_VAR)
    if app_port:
        overrides["bind_to"] = {"port": app_port}
        logger.info(f"Binding HTTP port from {VCAP_APP_PORT_VAR}")

    if config.redis.ignore_vcap_service_creds:
        logger.info(f"Ignoring redis credentials from {VCAP_SERVICES_VAR}")
    else:
        overrides["redis"] = redis_credentials(services)
        logger.info(f"Using redis credentials from {VCAP_SERVICES_VAR} ({REDIS_SERVICE_KEY})")

    return overrides
