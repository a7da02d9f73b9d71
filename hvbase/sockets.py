"""Socket helpers: name resolution, bind/listen/connect shortcuts and socket options."""

import errno
import os
import select
import socket
import struct
import sys

LOCALHOST = "127.0.0.1"
ANYADDR = "0.0.0.0"
DEFAULT_CONNECT_TIMEOUT = 5000  # ms

_CONNECT_PENDING = frozenset(
    code
    for code in (
        0,
        errno.EINPROGRESS,
        errno.EWOULDBLOCK,
        errno.EAGAIN,
        getattr(errno, "WSAEWOULDBLOCK", None),
    )
    if code is not None
)


def resolve(host):
    """Resolve ``host`` (an IP literal or a host name) to ``(family, ip)``.

    Literal IPv4 and IPv6 addresses are returned in canonical form; names are
    looked up as IPv4 and the first address is used. Raises ``OSError`` for
    an unknown host.
    """
    for family in (socket.AF_INET, socket.AF_INET6):
        try:
            packed = socket.inet_pton(family, host)
        except (OSError, ValueError):
            continue
        return family, socket.inet_ntop(family, packed)
    infos = socket.getaddrinfo(host, None, socket.AF_INET)
    if not infos:
        raise OSError(errno.EHOSTUNREACH, f"unknown host: {host}")
    return socket.AF_INET, infos[0][4][0]


def _sockaddr(host, port):
    if host is None:
        return socket.AF_INET, (ANYADDR, port)
    family, ip = resolve(host)
    if family == socket.AF_INET6:
        return family, (ip, port, 0, 0)
    return family, (ip, port)


def sockaddr_str(addr):
    """Render a socket address tuple as ``ip:port`` or ``[ipv6]:port``."""
    if len(addr) == 2:
        return f"{addr[0]}:{addr[1]}"
    if len(addr) == 4:
        return f"[{addr[0]}]:{addr[1]}"
    raise ValueError(f"not an IP socket address: {addr!r}")


def bind_socket(port, host=ANYADDR, sock_type=socket.SOCK_STREAM):
    """Create a socket of ``sock_type`` with SO_REUSEADDR and bind it to ``host:port``.

    ``host`` None binds to every IPv4 interface.
    """
    family, address = _sockaddr(host, port)
    sock = socket.socket(family, sock_type)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(address)
    except OSError:
        sock.close()
        raise
    return sock


def listen(port, host=ANYADDR):
    """Bind a TCP socket to ``host:port`` and start listening on it."""
    sock = bind_socket(port, host, socket.SOCK_STREAM)
    try:
        sock.listen(socket.SOMAXCONN)
    except OSError:
        sock.close()
        raise
    return sock


def connect(host, port, nonblock=False):
    """Open a TCP connection to ``host:port``.

    With ``nonblock`` the socket is non-blocking and the connection may still
    be in progress when it is returned.
    """
    family, address = _sockaddr(host, port)
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        if nonblock:
            sock.setblocking(False)
        err = sock.connect_ex(address)
        if err not in _CONNECT_PENDING:
            raise OSError(err, os.strerror(err))
    except OSError:
        sock.close()
        raise
    return sock


def connect_nonblock(host, port):
    """Start a non-blocking TCP connection to ``host:port``."""
    return connect(host, port, nonblock=True)


def connect_timeout(host, port, ms=DEFAULT_CONNECT_TIMEOUT):
    """Connect to ``host:port`` within ``ms`` milliseconds; returns a blocking socket.

    Raises ``TimeoutError`` when the time runs out and ``OSError`` when the
    connection fails.
    """
    sock = connect(host, port, nonblock=True)
    try:
        _, writable, _ = select.select([], [sock], [], ms / 1000)
        if not writable:
            raise TimeoutError(errno.ETIMEDOUT, os.strerror(errno.ETIMEDOUT))
        err = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
        if err:
            raise OSError(err, os.strerror(err))
        sock.setblocking(True)
    except BaseException:
        sock.close()
        raise
    return sock


def socketpair(family=socket.AF_INET, sock_type=socket.SOCK_STREAM, protocol=0):
    """Return a pair of connected sockets.

    Unix-domain pairs come from the system; otherwise only IPv4 stream
    pairs over the loopback interface are supported.
    """
    unix_family = getattr(socket, "AF_UNIX", None)
    if unix_family is not None and family == unix_family:
        return socket.socketpair(family, sock_type, protocol)
    if family != socket.AF_INET or sock_type != socket.SOCK_STREAM:
        raise ValueError("only AF_INET stream socket pairs are supported")

    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    connector = None
    try:
        listener.bind((LOCALHOST, 0))
        listener.listen(1)
        connector = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        connector.connect(listener.getsockname())
        acceptor, _ = listener.accept()
    except OSError:
        if connector is not None:
            connector.close()
        raise
    finally:
        listener.close()
    return connector, acceptor


def tcp_nodelay(sock, on=True):
    """Enable or disable Nagle's algorithm being bypassed (TCP_NODELAY)."""
    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, int(on))


def tcp_nopush(sock, on=True):
    """Set TCP_NOPUSH, or TCP_CORK where that is what the system offers."""
    option = getattr(socket, "TCP_NOPUSH", None)
    if option is None:
        option = getattr(socket, "TCP_CORK", None)
    if option is None:
        raise OSError(errno.ENOPROTOOPT, "TCP_NOPUSH and TCP_CORK are not available")
    sock.setsockopt(socket.IPPROTO_TCP, option, int(on))


def tcp_keepalive(sock, on=True, delay=60):
    """Enable keep-alive and, where supported, set the idle time to ``delay`` seconds."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, int(on))
    option = getattr(socket, "TCP_KEEPALIVE", None)
    if option is None:
        option = getattr(socket, "TCP_KEEPIDLE", None)
    if option is not None:
        sock.setsockopt(socket.IPPROTO_TCP, option, delay)


def udp_broadcast(sock, on=True):
    """Allow or forbid sending broadcast datagrams."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, int(on))


def _timeval(ms):
    if sys.platform == "win32":
        return struct.pack("i", ms)
    return struct.pack("ll", ms // 1000, (ms % 1000) * 1000)


def so_sndtimeo(sock, timeout):
    """Set the send timeout to ``timeout`` milliseconds."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDTIMEO, _timeval(timeout))


def so_rcvtimeo(sock, timeout):
    """Set the receive timeout to ``timeout`` milliseconds."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVTIMEO, _timeval(timeout))