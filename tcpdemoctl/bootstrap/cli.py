import argparse
import sys

from tcpdemo.core.helpers.utils import setup_logging
from tcpdemo.core.models.errors import ProtocolError
from tcpdemo.core.models.message import Echo, Jumble, Request
from tcpdemoctl.core.client import DEFAULT_SERVER_ADDR, TcpDemoClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tcpdemoctl",
        description="Send a single Echo or Jumble request to a tcpdemo server.",
    )
    parser.add_argument("message", help="Message to send")
    parser.add_argument(
        "-j", "--jumble",
        type=int,
        default=0,
        help="Jumble the message by this amount (default: 0, plain echo)",
    )
    parser.add_argument(
        "--addr",
        default=DEFAULT_SERVER_ADDR,
        help=f"Server address as host:port (default: {DEFAULT_SERVER_ADDR})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Socket timeout in seconds (default: block)",
    )
    parser.add_argument(
        "-l", "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def build_request(message: str, amount: int) -> Request:
    if amount != 0:
        return Jumble(message=message, amount=amount)
    return Echo(message=message)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        request = build_request(args.message, args.jumble)
        client = TcpDemoClient.from_addr(args.addr, timeout=args.timeout)
    except (TypeError, ValueError) as ex:
        parser.error(str(ex))

    try:
        with client:
            response = client.request(request)
    except (OSError, ProtocolError) as ex:
        print(f"Error sending request: {ex}", file=sys.stderr)
        return 1

    if not response.ok:
        print(response.text, file=sys.stderr)
        return 1

    print(response.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
