"""Connection target assembly and IPv4 host normalization for PostgreSQL.

Some managed Postgres providers publish AAAA records that are unreachable from
common hosting environments. Resolving the host to IPv4 up front and
connecting to the literal address avoids libpq picking the IPv6 route.
"""

import ipaddress
import logging
import socket
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy.engine import URL, make_url

from emilyloja.core.errors import DatabaseConnectionError

if TYPE_CHECKING:
    from emilyloja.core.config import Settings

logger = logging.getLogger(__name__)

POSTGRES_DRIVERNAME = "postgresql+psycopg2"
_POSTGRES_ALIASES = frozenset({"postgres", "postgresql", "postgres+psycopg2"})

TlsMode = Literal["disable", "require", "verify-full"]
FallbackPolicy = Literal["original", "abort"]


@dataclass(frozen=True)
class ConnectionTarget:
    """Where to reach the database: URL plus TLS policy.

    server_hostname keeps the DNS name when url.host was rewritten to an IP.
    """

    url: URL
    tls_mode: TlsMode = "verify-full"
    server_hostname: str | None = None

    @property
    def host(self) -> str | None:
        return self.url.host

    def with_host(self, address: str) -> "ConnectionTarget":
        """Return a copy pointing at address; every other URL component is kept."""
        return replace(
            self,
            url=self.url.set(host=address),
            server_hostname=self.server_hostname or self.url.host,
        )

    def connect_args(self) -> dict[str, Any]:
        """Extra DBAPI connect() kwargs for psycopg2 (empty for other backends)."""
        if self.url.get_backend_name() != "postgresql":
            return {}
        args: dict[str, Any] = {}
        # An explicit sslmode in DATABASE_URL wins.
        if "sslmode" not in self.url.query:
            args["sslmode"] = self.tls_mode
        if (
            self.tls_mode == "verify-full"
            and self.server_hostname
            and self.server_hostname != self.url.host
        ):
            # libpq connects to hostaddr and verifies the certificate against host.
            args["host"] = self.server_hostname
            args["hostaddr"] = self.url.host
        return args

    def display(self) -> str:
        """URL safe for logs (password hidden)."""
        return self.url.render_as_string(hide_password=True)


@dataclass(frozen=True)
class ResolvedHost:
    hostname: str
    address: str


@dataclass(frozen=True)
class ResolutionError:
    hostname: str
    reason: str


Ipv4Resolution = ResolvedHost | ResolutionError
Resolver = Callable[[str], Ipv4Resolution]


def _normalize_drivername(url: URL) -> URL:
    if url.drivername in _POSTGRES_ALIASES:
        return url.set(drivername=POSTGRES_DRIVERNAME)
    return url


def tls_mode_for(settings: "Settings") -> TlsMode:
    """Map DB_SSL / DB_SSL_VERIFY to a libpq sslmode."""
    if not settings.tls_enabled:
        return "disable"
    return "verify-full" if settings.DB_SSL_VERIFY else "require"


def build_connection_target(settings: "Settings") -> ConnectionTarget:
    """
    Build the connection target from settings.

    DATABASE_URL takes precedence; otherwise the URL is assembled from the
    DB_* fields (each has a default). URL.create escapes the password.
    """
    if settings.DATABASE_URL:
        url = make_url(settings.DATABASE_URL)
    else:
        url = URL.create(
            drivername=POSTGRES_DRIVERNAME,
            username=settings.DB_USER,
            password=settings.DB_PASS.get_secret_value() or None,
            host=settings.DB_HOST,
            port=settings.DB_PORT,
            database=settings.DB_NAME,
        )
    return ConnectionTarget(url=_normalize_drivername(url), tls_mode=tls_mode_for(settings))


def is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def resolve_ipv4(hostname: str) -> Ipv4Resolution:
    """Look up hostname restricted to the IPv4 family. Never raises."""
    try:
        infos = socket.getaddrinfo(hostname, None, family=socket.AF_INET, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError) as e:
        return ResolutionError(hostname=hostname, reason=str(e) or type(e).__name__)
    for _family, _type, _proto, _canonname, sockaddr in infos:
        if sockaddr and sockaddr[0]:
            return ResolvedHost(hostname=hostname, address=str(sockaddr[0]))
    return ResolutionError(hostname=hostname, reason="no IPv4 address returned")


def normalize_ipv4(
    target: ConnectionTarget,
    policy: FallbackPolicy = "original",
    resolver: Resolver = resolve_ipv4,
) -> ConnectionTarget:
    """
    Rewrite the target host to its IPv4 address.

    Targets without a host (unix socket, sqlite) or with an IP literal are
    returned as is. On resolution failure, policy "original" logs and keeps
    the hostname; policy "abort" raises DatabaseConnectionError.
    """
    host = target.host
    if not host or is_ip_literal(host):
        return target

    result = resolver(host)
    if isinstance(result, ResolvedHost):
        logger.info("Resolved database host %s to IPv4 %s", host, result.address)
        return target.with_host(result.address)

    if policy == "abort":
        logger.error("IPv4 resolution failed for %s: %s; aborting", host, result.reason)
        raise DatabaseConnectionError(
            f"Não foi possível resolver o host do banco ({host}) para IPv4."
        )
    logger.warning(
        "IPv4 resolution failed for %s: %s; using the original hostname", host, result.reason
    )
    return target
