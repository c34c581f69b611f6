"""Command line entry point: renders the status line to stdout or the X root window name."""

from __future__ import annotations

import os
import re
import select
import signal
import socket
import struct
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from slmon import config
from slmon.util import die, warn

PROG = "slmon"
VERSION = "1.0"

_X11_PORT = 6000
_WM_NAME = 39
_STRING = 31
_CHANGE_PROPERTY = 18
_FAMILY_LOCAL = 256
_COOKIE = b"MIT-MAGIC-COOKIE-1"


@dataclass
class Options:
    """Command line settings."""

    single: bool = False
    once: bool = False


def _usage():
    die(f"usage: {PROG} [-v] [-s] [-1]")


def parse_args(argv):
    """Parse the command line flags -v, -s and -1."""
    args = list(argv)
    options = Options()
    while args and args[0].startswith("-") and len(args[0]) > 1:
        flag = args.pop(0)
        if flag == "--":
            break
        for char in flag[1:]:
            if char == "v":
                die(f"{PROG}-{VERSION}")
            elif char == "1":
                options.once = True
                options.single = True
            elif char == "s":
                options.single = True
            else:
                _usage()
    if args:
        _usage()
    return options


def render_status(args, unknown, maxlen):
    """Join the rendered fields, truncating to fit ``maxlen`` bytes with the terminator."""
    if maxlen < 1:
        raise ValueError("maxlen must be at least 1")
    out = bytearray()
    for arg in args:
        piece = arg.render(unknown).encode()
        room = maxlen - len(out)
        if len(piece) >= room:
            out += piece[: room - 1]
            warn("vsnprintf: Output truncated")
            break
        out += piece
    return out.decode(errors="ignore")


def _pad(length):
    return -length % 4


def _parse_display(name):
    match = re.fullmatch(r"([^:]*):(\d+)(?:\.(\d+))?", name or "")
    if match is None:
        raise OSError(f"invalid display name {name!r}")
    host, number, screen = match.groups()
    return host, int(number), int(screen or 0)


def _read_xauthority(number, local):
    path = os.environ.get("XAUTHORITY") or os.path.join(os.path.expanduser("~"), ".Xauthority")
    try:
        data = Path(path).read_bytes()
    except OSError:
        return b"", b""
    hostname = socket.gethostname().encode()
    wanted = str(number).encode()
    pos = 0

    def field():
        nonlocal pos
        (length,) = struct.unpack_from(">H", data, pos)
        pos += 2
        value = data[pos : pos + length]
        pos += length
        return value

    while pos + 2 <= len(data):
        try:
            (family,) = struct.unpack_from(">H", data, pos)
            pos += 2
            address, num, auth_name, auth_data = field(), field(), field(), field()
        except struct.error:
            break
        if num not in (b"", wanted):
            continue
        if local and family == _FAMILY_LOCAL and address != hostname:
            continue
        if auth_name == _COOKIE:
            return auth_name, auth_data
    return b"", b""


class _RootWindow:
    """Minimal X11 client that sets the name of the root window."""

    def __init__(self, display=None):
        name = os.environ.get("DISPLAY", "") if display is None else display
        host, number, screen = _parse_display(name)
        local = host in ("", "unix")
        self._sock = self._connect(host, number, local)
        try:
            self.root = self._handshake(number, screen, local)
        except (OSError, struct.error, IndexError) as exc:
            self._sock.close()
            raise OSError(str(exc)) from exc

    @staticmethod
    def _connect(host, number, local):
        if not local:
            return socket.create_connection((host, _X11_PORT + number))
        path = f"/tmp/.X11-unix/X{number}"
        last = None
        for address in (path, "\0" + path):
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(address)
                return sock
            except OSError as exc:
                sock.close()
                last = exc
        raise last

    def _recv_exact(self, size):
        chunks = bytearray()
        while len(chunks) < size:
            chunk = self._sock.recv(size - len(chunks))
            if not chunk:
                raise OSError("connection closed by X server")
            chunks += chunk
        return bytes(chunks)

    def _handshake(self, number, screen, local):
        auth_name, auth_data = _read_xauthority(number, local)
        request = (
            struct.pack("<BxHHHH2x", 0x6C, 11, 0, len(auth_name), len(auth_data))
            + auth_name + b"\0" * _pad(len(auth_name))
            + auth_data + b"\0" * _pad(len(auth_data))
        )
        self._sock.sendall(request)
        head = self._recv_exact(8)
        (extra,) = struct.unpack_from("<H", head, 6)
        body = self._recv_exact(extra * 4)
        if head[0] != 1:
            reason = body[: head[1]] if head[0] == 0 else body
            raise OSError(f"X server refused connection: {reason.decode(errors='replace').strip()}")
        (vendor_len,) = struct.unpack_from("<H", body, 16)
        screens, formats = body[20], body[21]
        if screen >= screens:
            raise OSError(f"no screen {screen}")
        pos = 32 + vendor_len + _pad(vendor_len) + 8 * formats
        for _ in range(screen):
            depths = body[pos + 39]
            pos += 40
            for _ in range(depths):
                (visuals,) = struct.unpack_from("<H", body, pos + 2)
                pos += 8 + 24 * visuals
        (root,) = struct.unpack_from("<I", body, pos)
        return root

    def store_name(self, name):
        """Set WM_NAME of the root window to the bytes ``name``."""
        size = len(name)
        request = struct.pack(
            "<BBHIIIB3xI",
            _CHANGE_PROPERTY, 0, 6 + (size + _pad(size)) // 4,
            self.root, _WM_NAME, _STRING, 8, size,
        ) + name + b"\0" * _pad(size)
        self._sock.sendall(request)

    def close(self):
        self._sock.close()


class _Signals:
    """Installs the termination and refresh handlers and provides an interruptible wait."""

    def __init__(self, done):
        self.done = done

    def __enter__(self):
        self._reader, self._writer = socket.socketpair()
        self._reader.setblocking(False)
        self._writer.setblocking(False)
        self._old_fd = signal.set_wakeup_fd(self._writer.fileno())
        self._old = {
            signum: signal.signal(signum, handler)
            for signum, handler in (
                (signal.SIGINT, self._terminate),
                (signal.SIGTERM, self._terminate),
                (signal.SIGUSR1, self._refresh),
            )
        }
        return self

    def __exit__(self, *exc):
        for signum, handler in self._old.items():
            signal.signal(signum, handler)
        signal.set_wakeup_fd(self._old_fd)
        self._reader.close()
        self._writer.close()
        return False

    def _terminate(self, signum, frame):
        self.done = True

    def _refresh(self, signum, frame):
        pass

    def wait(self, seconds):
        """Sleep up to ``seconds``, returning early when a signal arrives."""
        select.select([self._reader], [], [], seconds)
        try:
            while self._reader.recv(64):
                pass
        except BlockingIOError:
            pass


def _run(options, root, signals):
    while True:
        start = time.monotonic()
        status = render_status(config.ARGS, config.UNKNOWN_STR, config.MAXLEN)
        if root is None:
            try:
                print(status, flush=True)
            except OSError:
                die("puts:")
        else:
            try:
                root.store_name(status.encode())
            except OSError:
                die("XStoreName: Allocation failed")
        if signals.done:
            break
        remaining = config.INTERVAL / 1000 - (time.monotonic() - start)
        if remaining >= 0:
            signals.wait(remaining)
        if signals.done:
            break


def main(argv=None):
    """Run the status monitor."""
    options = parse_args(sys.argv[1:] if argv is None else argv)
    with _Signals(options.once) as signals:
        root = None
        if not options.single:
            try:
                root = _RootWindow()
            except OSError:
                die("XOpenDisplay: Failed to open display")
        try:
            _run(options, root, signals)
        finally:
            if root is not None:
                try:
                    root.store_name(b"")
                    root.close()
                except OSError:
                    die("XCloseDisplay: Failed to close display")
    return 0


if __name__ == "__main__":
    sys.exit(main())