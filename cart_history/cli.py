import argparse
import logging
import shlex
import sys
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation
from typing import TextIO

from cart_history.report import render_cart, render_history
from cart_history.session import CartSession

DEFAULT_CAPACITY = 5

HELP_TEXT = """Commands:
  show                          - show cart
  add <id> <name> <qty> <price> - add product
  remove <id> [qty]             - remove product (no qty or 0 removes all)
  undo                          - undo last change
  redo                          - redo undone change
  clear                         - clear cart
  history                       - show history size
  reset-history                 - clear history, keep current cart as baseline
  help                          - show this help
  quit                          - exit"""


class CommandError(Exception):
    """Malformed command line entered by the user."""


def _parse_int(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise CommandError(f"{field} must be an integer, got {value!r}") from None


def _parse_price(value: str) -> Decimal:
    try:
        price = Decimal(value)
    except InvalidOperation:
        raise CommandError(f"price must be a number, got {value!r}") from None
    if not price.is_finite():
        raise CommandError(f"price must be a finite number, got {value!r}")
    return price


def handle_command(session: CartSession, argv: Sequence[str]) -> str:
    """Execute one parsed command against the session and return the text to print."""
    command, args = argv[0].lower(), argv[1:]

    match command:
        case "show":
            return render_cart(session.cart)
        case "add":
            if len(args) != 4:
                raise CommandError("usage: add <id> <name> <qty> <price>")
            product_id = _parse_int(args[0], "id")
            quantity = _parse_int(args[2], "quantity")
            return session.add(product_id, args[1], quantity, _parse_price(args[3])).details
        case "remove":
            if len(args) not in (1, 2):
                raise CommandError("usage: remove <id> [qty]")
            product_id = _parse_int(args[0], "id")
            quantity = _parse_int(args[1], "quantity") if len(args) == 2 else 0
            return session.remove(product_id, quantity).details
        case "undo":
            return session.undo().details
        case "redo":
            return session.redo().details
        case "clear":
            return session.clear_cart().details
        case "history":
            return render_history(session.history)
        case "reset-history":
            return session.clear_history().details
        case "help":
            return HELP_TEXT
        case _:
            raise CommandError(f"unknown command {command!r}, type 'help'")


def run(lines: Iterable[str], out: TextIO, capacity: int = DEFAULT_CAPACITY) -> int:
    """Interactive loop: read commands from `lines` until `quit` or end of input."""
    session = CartSession(capacity=capacity)
    print("=== SHOPPING CART ===", file=out)
    print(HELP_TEXT, file=out)

    for line in lines:
        try:
            argv = shlex.split(line)
        except ValueError as e:
            print(f"Error: {e}", file=out)
            continue

        if not argv:
            continue
        if argv[0].lower() in ("quit", "exit"):
            break

        try:
            print(handle_command(session, argv), file=out)
        except CommandError as e:
            print(f"Error: {e}", file=out)

    print("Bye.", file=out)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cart-history",
        description="Shopping cart with bounded undo/redo history",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=DEFAULT_CAPACITY,
        help=f"Maximum number of saved cart states (default: {DEFAULT_CAPACITY})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    if args.capacity <= 0:
        parser.error(f"--capacity must be positive, got {args.capacity}")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    return run(sys.stdin, sys.stdout, capacity=args.capacity)


if __name__ == "__main__":
    sys.exit(main())
