"""Swarm discovery string validation."""

import re
from urllib.parse import urlsplit


class ValidationError(Exception):
    """Swarm discovery string is malformed."""

    pass


# scheme://remainder, scheme per RFC 3986, no whitespace anywhere
DISCOVERY_PATTERN = re.compile(r"(?P<scheme>[A-Za-z][A-Za-z0-9+.-]*)://(?P<rest>\S+)")

# Backends that address a key-value store and need a host
KV_BACKENDS = {"consul", "etcd", "zk"}


def _error(discovery: str, reason: str) -> ValidationError:
    return ValidationError(
        f"Swarm Discovery URL was in the wrong format: {discovery} ({reason})"
    )


def validate_swarm_discovery(discovery: str) -> None:
    """
    Validate a swarm discovery reference.

    An empty string means no discovery and is accepted. Anything else must
    look like ``scheme://...``; known backends get an extra structural check.
    Nothing is resolved or contacted.

    Args:
        discovery: Discovery string from the command line

    Raises:
        ValidationError: If the string is not a well-formed reference
    """
    if discovery == "":
        return

    match = DISCOVERY_PATTERN.fullmatch(discovery)
    if match is None:
        raise _error(discovery, "expected scheme://...")

    scheme = match.group("scheme").lower()
    rest = match.group("rest")

    if scheme == "token":
        if "/" in rest:
            raise _error(discovery, "token must be a single opaque value")
        return

    if scheme == "nodes":
        if not any(host.strip() for host in rest.split(",")):
            raise _error(discovery, "no nodes given")
        return

    try:
        parts = urlsplit(discovery)
    except ValueError as e:
        raise _error(discovery, str(e)) from e

    if scheme == "file" and not parts.path:
        raise _error(discovery, "missing file path")

    if scheme in KV_BACKENDS and not parts.hostname:
        raise _error(discovery, f"{scheme} discovery requires a host")
