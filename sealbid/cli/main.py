"""
sealbid CLI - Command Line Interface for sealed-bid auctions

Main entry point for all CLI commands. Every command prints one JSON
object; protocol errors are printed as {"error": ..., "message": ...}
and exit with status 1.
"""

import json
import functools
import click
from pathlib import Path

from sealbid.utils.logger import setup_logging, get_logger
from sealbid.core.errors import AuctionError

logger = get_logger("cli")


def emit(payload: dict):
    click.echo(json.dumps(payload, indent=2))


def protocol_command(func):
    """Run a command against the engine, turning protocol errors into JSON."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AuctionError as e:
            logger.debug(f"{func.__name__} rejected: {e.code}")
            emit(e.to_payload())
            raise SystemExit(1)
    return wrapper


def open_engine(ctx):
    """Build the engine lazily so commands that need no storage stay cheap."""
    from sealbid.core.engine import AuctionEngine
    from sealbid.core.storage import StorageManager
    from sealbid.core.tokens import TokenScheme

    config = ctx.obj["config"]
    tokens = TokenScheme(
        seat_token_bytes=config.seat_token_bytes,
        auction_id_bytes=config.auction_id_bytes,
    )
    storage = StorageManager(config.db_path, tokens=tokens)
    ctx.call_on_close(storage.close)
    return AuctionEngine(storage, config=config, tokens=tokens)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--db-path", default=None, help="SQLite database file")
@click.option("--env-file", default=None, type=click.Path(dir_okay=False), help=".env file to load")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, db_path, env_file):
    """Sealed-bid two-party auctions with commit-reveal"""
    import logging
    from sealbid.core.config import load_config

    config = load_config(env_file)
    if db_path:
        config.db_path = Path(db_path).expanduser()
    if debug:
        config.log_level = logging.DEBUG

    setup_logging(
        level=config.log_level,
        log_dir=str(config.log_dir),
        log_to_file=config.log_to_file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# =============================================================================
# Auction Commands
# =============================================================================


@cli.command("create")
@click.option("--title", required=True, help="Auction title (max 200 chars)")
@click.option("--description", default=None, help="Free-form description")
@click.option("--item-url", default=None, help="Link to the item")
@click.pass_context
@protocol_command
def create(ctx, title, description, item_url):
    """Create an auction and print its id and both seat tokens"""
    engine = open_engine(ctx)
    created = engine.create(title, description, item_url)
    emit(created.to_payload())


@cli.command("commit")
@click.argument("auction_id")
@click.argument("seat_token")
@click.argument("digest")
@click.pass_context
@protocol_command
def commit(ctx, auction_id, seat_token, digest):
    """Submit a commitment digest for your seat"""
    engine = open_engine(ctx)
    emit(engine.commit(auction_id, seat_token, digest).to_payload())


@cli.command("reset-commit")
@click.argument("auction_id")
@click.argument("seat_token")
@click.pass_context
@protocol_command
def reset_commit(ctx, auction_id, seat_token):
    """Withdraw your commitment (only before the other seat commits)"""
    engine = open_engine(ctx)
    emit(engine.reset_commit(auction_id, seat_token).to_payload())


@cli.command("reveal")
@click.argument("auction_id")
@click.argument("seat_token")
@click.option("--bid", required=True, help="Bid exactly as committed")
@click.option("--secret", required=True, help="Secret used in the commitment")
@click.pass_context
@protocol_command
def reveal(ctx, auction_id, seat_token, bid, secret):
    """Reveal your bid and secret"""
    engine = open_engine(ctx)
    emit(engine.reveal(auction_id, seat_token, bid, secret).to_payload())


@cli.command("status")
@click.argument("auction_id")
@click.option("--seat-token", default=None, help="Identify your seat in the output")
@click.pass_context
@protocol_command
def status(ctx, auction_id, seat_token):
    """Show the auction phase and who has committed/revealed"""
    engine = open_engine(ctx)
    emit(engine.get_status(auction_id, seat_token).to_payload())


@cli.command("result")
@click.argument("auction_id")
@click.pass_context
@protocol_command
def result(ctx, auction_id):
    """Show the winner once both bids are revealed"""
    engine = open_engine(ctx)
    emit(engine.get_result(auction_id).to_payload())


# =============================================================================
# Client-side Helpers
# =============================================================================


@cli.command("commitment")
@click.argument("auction_id")
@click.argument("seat", type=click.Choice(["A", "B"]))
@click.option("--bid", required=True, help="Your bid (max 2 decimals)")
@click.option("--secret", default=None, help="Secret to bind; generated if omitted")
def commitment(auction_id, seat, bid, secret):
    """Compute the digest to commit (runs locally, stores nothing)"""
    from sealbid.core.auction import validate_bid, create_sealed_bid

    valid, err = validate_bid(bid)
    if not valid:
        emit({"error": "validation_error", "message": err})
        raise SystemExit(1)

    sealed = create_sealed_bid(bid, auction_id, seat, secret)
    emit({
        "bid": sealed.bid,
        "secret": sealed.secret,
        "commit": sealed.commitment,
    })


# =============================================================================
# Demo Command
# =============================================================================


@cli.command("demo")
@click.option("--bid-a", default="150.00", help="Seat A bid")
@click.option("--bid-b", default="200.00", help="Seat B bid")
def demo(bid_a, bid_b):
    """Run a full auction between two seats in a throwaway database"""
    import tempfile
    from sealbid.core.auction import compute_commit_hash
    from sealbid.core.engine import AuctionEngine
    from sealbid.core.storage import StorageManager

    click.echo("=" * 60)
    click.echo("  SEALED-BID AUCTION - DEMO")
    click.echo("=" * 60)
    click.echo()

    with tempfile.TemporaryDirectory() as tmp:
        storage = StorageManager(Path(tmp) / "demo.db")
        engine = AuctionEngine(storage)
        try:
            created = engine.create("Demo item", "Two sealed bids", None)
            click.echo("📦 Auction created")

            commit_a = compute_commit_hash(bid_a, "peanut", created.auction_id, "A")
            commit_b = compute_commit_hash(bid_b, "walnut", created.auction_id, "B")
            engine.commit(created.auction_id, created.seat_a_token, commit_a)
            engine.commit(created.auction_id, created.seat_b_token, commit_b)
            click.echo(f"🔒 Both seats committed (phase: {engine.get_status(created.auction_id).phase})")

            engine.reveal(created.auction_id, created.seat_a_token, bid_a, "peanut")
            engine.reveal(created.auction_id, created.seat_b_token, bid_b, "walnut")
            click.echo("🔓 Both seats revealed")
            click.echo()

            outcome = engine.get_result(created.auction_id)
            click.echo(f"  Bid A: {outcome.bid_a}")
            click.echo(f"  Bid B: {outcome.bid_b}")
            click.echo(f"  Winner: {outcome.winner}")
            click.echo(f"  Payment: {outcome.payment_amount}")
        except AuctionError as e:
            click.echo(f"❌ {e.message}")
            raise SystemExit(1)
        finally:
            storage.close()

    click.echo()
    click.echo("✅ Demo complete!")


if __name__ == "__main__":
    cli()
