#!/usr/bin/env python3
"""
netlib CLI - small TCP/UDP utilities built on the netlib operations.

Usage:
    netlib send localhost 8080 "ping"
    netlib echo 8080 --count 1
    netlib udp-send localhost 9000 "hello"
    netlib udp-recv 9000 --count 1
    netlib --config etc/netlib.yaml --log-level debug echo 8080

Failures print "ERROR (<code>): <message>" to stderr and exit with 1.
"""

import argparse
import sys
from collections.abc import Sequence
from typing import IO, Any

import netlib
from netlib.config import NetConfig, load_config
from netlib.exceptions import NetlibError
from netlib.log import LogConfig, create_lg
from netlib.net import (
    NetError,
    RecvError,
    SendError,
    accept_once,
    connect,
    create_host,
    create_udp_host,
    disconnect,
    recv_from,
    recv_once,
    send_all,
    send_once,
    send_then_recv,
)


def _version_string() -> str:
    """Version plus build commit when the package was built from git."""
    try:
        from netlib import _build_info  # type: ignore[attr-defined]
    except ImportError:
        return f"netlib {netlib.__version__}"
    modified = "-modified" if _build_info.MODIFIED else ""
    return f"netlib {netlib.__version__} ({_build_info.COMMIT_SHORT}{modified})"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netlib", description="TCP/UDP socket utilities"
    )
    parser.add_argument("--version", action="version", version=_version_string())
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument(
        "-l", "--log-level", help="log level (trace, debug, info, warning, error)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("send", help="send a TCP request and print one reply")
    p.add_argument("host")
    p.add_argument("port")
    p.add_argument("message")

    p = sub.add_parser("echo", help="run a TCP echo server, one client at a time")
    p.add_argument("port")
    p.add_argument("--count", type=int, help="stop after this many clients")

    p = sub.add_parser("udp-send", help="send one UDP datagram")
    p.add_argument("host")
    p.add_argument("port")
    p.add_argument("message")

    p = sub.add_parser("udp-recv", help="print received UDP datagrams")
    p.add_argument("port")
    p.add_argument("--count", type=int, help="stop after this many datagrams")

    return parser


def _cmd_send(args: Any, cfg: NetConfig, lg: Any, out: IO[str]) -> int:
    with connect(args.host, args.port, family=cfg.address_family, lg=lg) as handle:
        reply = send_then_recv(
            handle, args.message.encode(), max_bytes=cfg.recv_size, lg=lg
        )
        disconnect(handle)
    out.write(reply.decode(errors="replace") + "\n")
    return 0


def _echo_client(handle: Any, cfg: NetConfig, lg: Any) -> int:
    """Echo until the client disconnects or fails. Returns bytes echoed."""
    total = 0
    with handle:
        while True:
            try:
                data = recv_once(handle, cfg.recv_size, lg=lg)
                total += send_all(handle, data, lg=lg)
            except (RecvError, SendError):
                break
    return total


def _cmd_echo(args: Any, cfg: NetConfig, lg: Any, out: IO[str]) -> int:
    served = 0
    with create_host(args.port, family=cfg.address_family, lg=lg) as host:
        lg.info("echo server listening", extra={"port": args.port})
        while args.count is None or served < args.count:
            client, peer = accept_once(host, cfg.backlog, lg=lg)
            lg.info("client connected", extra={"peer": peer})
            total = _echo_client(client, cfg, lg)
            lg.info("client disconnected", extra={"peer": peer, "bytes": total})
            served += 1
    return 0


def _cmd_udp_send(args: Any, cfg: NetConfig, lg: Any, out: IO[str]) -> int:
    sent = send_once(
        args.host, args.port, args.message.encode(), family=cfg.address_family, lg=lg
    )
    out.write(f"{sent}\n")
    return 0


def _cmd_udp_recv(args: Any, cfg: NetConfig, lg: Any, out: IO[str]) -> int:
    received = 0
    with create_udp_host(args.port, family=cfg.address_family, lg=lg) as host:
        lg.info("udp receiver bound", extra={"port": args.port})
        while args.count is None or received < args.count:
            data, peer = recv_from(host, lg=lg)
            out.write(data.decode(errors="replace") + "\n")
            out.flush()
            received += 1
    return 0


_COMMANDS = {
    "send": _cmd_send,
    "echo": _cmd_echo,
    "udp-send": _cmd_udp_send,
    "udp-recv": _cmd_udp_recv,
}


def main(
    argv: Sequence[str] | None = None,
    out: IO[str] | None = None,
    err: IO[str] | None = None,
) -> int:
    """Main entry point for the netlib CLI."""
    out = out or sys.stdout
    err = err or sys.stderr
    args = _build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        cfg = NetConfig.from_config(config)
        log_cfg = LogConfig.from_config(config)
        level = args.log_level if args.log_level is not None else log_cfg.level
        colors = None if log_cfg.colors else False
        lg = create_lg(level, micros=log_cfg.micros, colors=colors, stream=err)
    except NetlibError as e:
        err.write(f"ERROR: {e}\n")
        return 2

    try:
        return _COMMANDS[args.command](args, cfg, lg, out)
    except NetError as e:
        lg.debug("command failed", extra={"kind": e.kind, "exception": e})
        err.write(f"ERROR ({e.code}): {e.kind.message}\n")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
