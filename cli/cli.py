# cli/cli.py
"""
CLI registry and dispatcher for the offer selection service.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

# Ensure project root is in path for imports
_cli_dir = Path(__file__).parent
_project_root = _cli_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import httpx
import pydantic

from offer_api.core.config import settings
from offer_api.schemas.offer import OfferCreate, OfferResponse
from offer_api.schemas.transaction import TransactionIn
from offer_api.services.offer_store import OfferStore
from offer_api.services.selection import rank_applicable_offers, select_best_offer

EXIT_NO_APPLICABLE_OFFER = 2


def _supports_color() -> bool:
    """Check if terminal supports ANSI color codes."""
    if sys.platform == "win32":
        return os.getenv("TERM") == "xterm" or os.getenv("ANSICON") is not None
    return sys.stdout.isatty()


SUPPORTS_COLOR = _supports_color()

GREEN = '\033[92m' if SUPPORTS_COLOR else ''
RED = '\033[91m' if SUPPORTS_COLOR else ''
YELLOW = '\033[93m' if SUPPORTS_COLOR else ''
BLUE = '\033[94m' if SUPPORTS_COLOR else ''
RESET = '\033[0m' if SUPPORTS_COLOR else ''


def print_success(message: str):
    print(f"{GREEN}[✓]{RESET} {message}")


def print_error(message: str):
    print(f"{RED}[✗]{RESET} {message}")


def print_warning(message: str):
    print(f"{YELLOW}[!]{RESET} {message}")


def print_info(message: str):
    print(f"{BLUE}[i]{RESET} {message}")


def load_offers(path: str) -> List[OfferCreate]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = [payload]
    return [OfferCreate.model_validate(item) for item in payload]


def load_transaction(path: str) -> TransactionIn:
    return TransactionIn.model_validate_json(Path(path).read_text(encoding="utf-8"))


# Command functions
async def cmd_serve(args: argparse.Namespace) -> int:
    """Command: Run the API server."""
    import uvicorn

    host = args.host or settings.api_host
    port = args.port or settings.api_port
    print_info(f"Serving offer API on http://{host}:{port}")

    config = uvicorn.Config("offer_api.main:app", host=host, port=port, log_config=None)
    await uvicorn.Server(config).serve()
    return 0


async def cmd_evaluate(args: argparse.Namespace) -> int:
    """Command: Pick the best offer for a transaction offline."""
    try:
        offers = load_offers(args.offers)
        transaction = load_transaction(args.transaction)
    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Could not read input: {e}")
        return 1
    except pydantic.ValidationError as e:
        print_error("Invalid input data")
        for error in e.errors():
            loc = ".".join(str(part) for part in error.get("loc", []))
            print_error(f"  {loc}: {error.get('msg')}")
        return 1

    store = OfferStore()
    for offer in offers:
        store.put(offer.to_domain())

    snapshot = store.all()
    txn = transaction.to_domain()
    best = select_best_offer(txn, snapshot)

    if best is None:
        print_warning(f"No applicable offer for transaction '{txn.txn_id}' ({len(snapshot)} offers checked)")
        return EXIT_NO_APPLICABLE_OFFER

    print_success(f"Applied offer '{best.id}' to transaction '{txn.txn_id}'")
    if args.verbose:
        for rank, offer in enumerate(rank_applicable_offers(txn, snapshot), start=1):
            print_info(f"  {rank}. {offer.id} (outcome={offer.outcome})")
    print(json.dumps(OfferResponse.from_domain(best).model_dump(by_alias=True), indent=2))
    return 0


async def cmd_check_health(args: argparse.Namespace) -> int:
    """Command: Check a running instance answers its health endpoint."""
    url = f"{args.api_url.rstrip('/')}{settings.api_prefix}/health"
    print_info(f"Checking {url}...")
    try:
        async with httpx.AsyncClient(timeout=args.timeout) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        print_error(f"API not reachable: {e}")
        return 1

    if response.status_code != 200:
        print_error(f"Health check returned HTTP {response.status_code}")
        return 1

    body = response.json()
    if body.get("status") != "healthy":
        print_error(f"API status: {body.get('status')}")
        return 1

    offers = body.get("checks", {}).get("offer_store", {}).get("offers", "?")
    print_success(f"API healthy ({offers} offers loaded)")
    return 0


# Command registry
COMMANDS: Dict[str, Callable] = {
    'serve': cmd_serve,
    'evaluate': cmd_evaluate,
    'check-health': cmd_check_health,
}


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        description='Offer selection CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    serve_parser = subparsers.add_parser('serve', help='Run the API server')
    serve_parser.add_argument('--host', default=None, help='Bind host (defaults to API_HOST)')
    serve_parser.add_argument('--port', type=int, default=None, help='Bind port (defaults to API_PORT)')

    eval_parser = subparsers.add_parser('evaluate', help='Select the best offer for a transaction offline')
    eval_parser.add_argument('--offers', required=True, help='JSON file with an offer or a list of offers')
    eval_parser.add_argument('--transaction', required=True, help='JSON file with one transaction')
    eval_parser.add_argument('--verbose', action='store_true', help='Also list every applicable offer')

    health_parser = subparsers.add_parser('check-health', help='Check a running API instance')
    health_parser.add_argument('--api-url', default='http://localhost:8080', help='API URL')
    health_parser.add_argument('--timeout', type=float, default=5.0, help='Request timeout in seconds')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    command_func = COMMANDS.get(parsed_args.command)
    if not command_func:
        print_error(f"Unknown command: {parsed_args.command}")
        parser.print_help()
        return 1

    try:
        return asyncio.run(command_func(parsed_args))
    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
