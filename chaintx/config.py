"""Client configuration.

The configuration is the only long-lived state in the engine. It is
immutable: changing a header produces a new config, and the client rebuilds
its transport from it.
"""

import os
from dataclasses import dataclass, field, replace

DEFAULT_TIMEOUT = 10.0


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a JSON-RPC endpoint.

    Attributes:
        url: HTTP(S) endpoint of the node
        timeout: Per-request timeout in seconds
        headers: Extra HTTP headers as (name, value) pairs
        check_sync: If True, reads that would be misleading on a syncing node
            raise SyncingNode instead of returning stale data, and simulated
            calls carry an explicit nonce and gas allowance.
    """

    url: str
    timeout: float = DEFAULT_TIMEOUT
    headers: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    check_sync: bool = False

    def with_header(self, key: str, value: str) -> "ClientConfig":
        """Return a copy with the header set, replacing any header of the same name."""
        kept = tuple((k, v) for k, v in self.headers if k.lower() != key.lower())
        return replace(self, headers=kept + ((key, value),))

    def header_dict(self) -> dict[str, str]:
        return dict(self.headers)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from CHAINTX_* environment variables.

        Raises:
            ValueError: If CHAINTX_RPC_URL is not set
        """
        url = os.environ.get("CHAINTX_RPC_URL")
        if not url:
            raise ValueError("CHAINTX_RPC_URL is not set")
        return cls(
            url=url,
            timeout=float(os.environ.get("CHAINTX_RPC_TIMEOUT", str(DEFAULT_TIMEOUT))),
            check_sync=_env_flag("CHAINTX_CHECK_SYNC"),
        )
