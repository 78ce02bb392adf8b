import json
import logging
import sys

import click

from .client import Client
from .errors import AstroLoyaltyError


def setup_logging(level=logging.WARNING):
    """Print the package's log records to stderr. Only the command line does this."""
    logger = logging.getLogger("astro_loyalty")
    for handler in [h for h in logger.handlers if getattr(h, "cli_handler", False)]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.cli_handler = True
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def _run(operation, **kwargs):
    try:
        with Client.from_env() as client:
            result = getattr(client, operation)(**kwargs)
    except AstroLoyaltyError as exc:
        click.echo(f"Request failed: {exc}", err=True)
        sys.exit(1)
    click.echo(json.dumps(result, indent=2))


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log each request.")
def cli_start(verbose: bool) -> None:
    """
    Query the Astro Loyalty API with credentials taken from ASTRO_LOYALTY_* variables.
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@cli_start.command(name="customer-status")
@click.argument("customer_id")
def customer_status(customer_id: str) -> None:
    """Show a customer's loyalty status."""
    _run("customer_status", customer_id=customer_id)


@cli_start.command(name="customer-reward-status")
@click.argument("customer_id")
def customer_reward_status(customer_id: str) -> None:
    """Show the rewards a customer has earned."""
    _run("customer_reward_status", customer_id=customer_id)


@cli_start.command(name="search-customer")
@click.option("--email", "email_address", default=None, help="Email address to search for.")
@click.option("--phone", default=None, help="Phone number to search for.")
def search_customer(email_address: str, phone: str) -> None:
    """Find a customer by email address or phone."""
    _run("search_customer", email_address=email_address, phone=phone)


@cli_start.command(name="list-offers")
def list_offers() -> None:
    """List the offers configured for the program."""
    _run("list_offers")


@cli_start.command(name="check-redemption-eligibility")
@click.argument("customer_id")
@click.argument("item_code")
def check_redemption_eligibility(customer_id: str, item_code: str) -> None:
    """Check whether a customer may redeem an item."""
    _run("check_redemption_eligibility", customer_id=customer_id, item_code=item_code)
