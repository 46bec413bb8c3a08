"""Domain exception hierarchy.

Fetch and shape-validation failures are not represented here: adapters absorb
them into a ``None`` result.  These exceptions cover the failures that must
reach the caller.
"""

from __future__ import annotations


class ManagedGitError(Exception):
    """Base exception for the entire package."""


# ── Capability errors ───────────────────────────────────────────────────────


class CapabilityNotImplementedError(ManagedGitError, NotImplementedError):
    """A declared capability was invoked that the provider does not implement yet."""

    def __init__(self, provider: str, capability: str) -> None:
        self.provider = provider
        self.capability = capability
        super().__init__(f"{provider} does not implement '{capability}' yet.")


# ── Configuration errors ────────────────────────────────────────────────────


class ServerConfigUnavailableError(ManagedGitError):
    """The credential vault has no complete host/user/token triple for a host id."""

    def __init__(self, host_id: str) -> None:
        self.host_id = host_id
        super().__init__(
            f"No server configuration for '{host_id}'. "
            f"Set {host_id}_HOST, {host_id}_USER and {host_id}_TOKEN."
        )


# ── Interface-level errors ──────────────────────────────────────────────────


class ContentNotFoundError(ManagedGitError):
    """The provider returned nothing usable (no tags, no content, or a failed fetch)."""


class ContentDecodeError(ManagedGitError):
    """Lazily-parsed JSON content turned out not to be valid JSON."""
