import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from okit_boost.adapters.cart_storage import create_cart_storage
from okit_boost.components.cart import (
    AddItemInput,
    CartStore,
    CartSummary,
    RemoveItemInput,
    UpdateQuantityInput,
    run_add,
    run_clear,
    run_remove,
    run_update_quantity,
    summarize,
)
from okit_boost.config.loader import load_config
from okit_boost.config.models import AppConfig
from okit_boost.constants import NOT_AUTHENTICATED, SUCCESS_MESSAGES
from okit_boost.context import ServiceContext
from okit_boost.domain.entities import AuthUser, Row
from okit_boost.domain.errors import InvalidRequest
from okit_boost.ports.remote import RemoteServiceError

logger = logging.getLogger("cli")


def format_summary(summary: CartSummary) -> str:
    if not summary.items:
        return "Panier vide."

    lines = []
    for item in summary.items:
        label = item.service_name or item.service_id
        platform = f" [{item.platform_id}]" if item.platform_id else ""
        lines.append(
            f"{item.service_id:<20} {label}{platform} x{item.quantity} "
            f"= {item.total_usd} USD / {item.total_cdf} CDF"
        )
    lines.append(
        f"Total: {summary.total_usd} USD / {summary.total_cdf} CDF "
        f"({summary.item_count} articles)"
    )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Okit Boost cart")
    parser.add_argument("--config", type=Path, help="Path to okit_boost.yaml")
    parser.add_argument("--storage-dir", help="Directory holding the cart file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # add
    add_parser = subparsers.add_parser("add", help="Add a service to the cart")
    add_parser.add_argument("service_id")
    add_parser.add_argument("--quantity", type=int, required=True)
    add_parser.add_argument("--price-usd", type=float, required=True)
    add_parser.add_argument("--price-cdf", type=float, required=True)
    add_parser.add_argument("--name", help="Service name")
    add_parser.add_argument("--platform", help="Platform id")
    add_parser.add_argument("--link", help="Target link to boost")

    # update
    update_parser = subparsers.add_parser("update", help="Change an item's quantity")
    update_parser.add_argument("service_id")
    update_parser.add_argument("quantity", type=int)

    # remove
    remove_parser = subparsers.add_parser("remove", help="Remove an item")
    remove_parser.add_argument("service_id")

    # clear / show
    subparsers.add_parser("clear", help="Empty the cart")
    subparsers.add_parser("show", help="Print the cart")

    # checkout
    checkout_parser = subparsers.add_parser("checkout", help="Place an order for the cart")
    checkout_parser.add_argument(
        "--token",
        default=os.environ.get("OKIT_ACCESS_TOKEN"),
        help="Access token of the customer (default: $OKIT_ACCESS_TOKEN)",
    )
    checkout_parser.add_argument("--name", dest="customer_name", required=True)
    checkout_parser.add_argument("--email", dest="customer_email", required=True)
    checkout_parser.add_argument("--phone", dest="customer_phone", required=True)
    checkout_parser.add_argument("--payment-method", required=True)
    checkout_parser.add_argument("--currency", choices=["USD", "CDF"], default="USD")
    checkout_parser.add_argument("--notes")

    return parser


def order_items(store: CartStore) -> list[dict[str, Any]]:
    """Cart lines in the shape the order endpoint takes; prices are repriced server-side."""
    return [
        {
            "service_id": item.service_id,
            "quantity": item.quantity,
            "service_name": item.service_name,
            "platform": item.platform_id,
            "target_link": item.target_link,
        }
        for item in store.items
    ]


def checkout_cart(
    store: CartStore, ctx: ServiceContext, user: AuthUser, customer: dict[str, Any]
) -> Row:
    """Place an order for the cart's contents, then empty the cart."""
    order = ctx.checkout_service.create_order(user, {**customer, "items": order_items(store)})
    store.clear_cart()
    return order


def run_checkout(args: argparse.Namespace, config: AppConfig, store: CartStore) -> int:
    if not store.items:
        print("Panier vide.")
        return 1

    try:
        ctx = ServiceContext.create(config)
    except ValueError as e:
        logger.error(f"Cannot reach the backend: {e}")
        return 1

    customer = {
        "customer_name": args.customer_name,
        "customer_email": args.customer_email,
        "customer_phone": args.customer_phone,
        "payment_method": args.payment_method,
        "currency": args.currency,
        "notes": args.notes,
    }
    try:
        user = ctx.account_service.resolve_user(args.token)
        if user is None:
            print(NOT_AUTHENTICATED)
            return 1
        order = checkout_cart(store, ctx, user, customer)
    except InvalidRequest as e:
        print(e.message)
        return 1
    except RemoteServiceError:
        logger.exception("Checkout failed")
        print("Erreur lors de la création de la commande")
        return 1
    finally:
        ctx.close()

    print(f"{SUCCESS_MESSAGES['ORDER_CREATED']}: {order.get('order_number') or order['id']}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = load_config(args.config)
    except ValueError as e:
        logger.error(f"Invalid config: {e}")
        return 1

    storage = create_cart_storage(config.cart, base_path=args.storage_dir)
    store = CartStore(storage, key=config.cart.storage_key)
    store.subscribe(lambda s: logger.debug("Cart saved with %d items", s.item_count))

    if args.command == "checkout":
        return run_checkout(args, config, store)

    if args.command == "add":
        summary = run_add(
            AddItemInput(
                service_id=args.service_id,
                quantity=args.quantity,
                price_usd=args.price_usd,
                price_cdf=args.price_cdf,
                service_name=args.name,
                platform_id=args.platform,
                target_link=args.link,
            ),
            store,
        )
    elif args.command == "update":
        summary = run_update_quantity(
            UpdateQuantityInput(service_id=args.service_id, quantity=args.quantity), store
        )
    elif args.command == "remove":
        summary = run_remove(RemoveItemInput(service_id=args.service_id), store)
    elif args.command == "clear":
        summary = run_clear(store)
    else:
        summary = summarize(store)

    print(format_summary(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
