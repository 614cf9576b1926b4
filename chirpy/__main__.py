"""
Chirpy Entry Point

Admin commands over the document store, via `python -m chirpy`.
Configures logging to stderr (stdout carries command output).
"""

import json
import logging
import sys

import click

from .core.config import ChirpyConfig, ConfigError
from .core.constants import SERVICE_NAME, SERVICE_VERSION
from .persistence.document_store import DocumentStoreError
from .persistence.json_store import JSONStoreError
from .security.authentication.token_authority import TokenError


def setup_logging(verbose: bool = False):
    """Configure logging to stderr"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def _open_store(ctx: click.Context, reset: bool = False):
    config = ctx.obj["config"]
    try:
        return config.build_store(reset=reset)
    except JSONStoreError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=SERVICE_VERSION, prog_name=SERVICE_NAME)
@click.option("--debug", is_flag=True, help="Use the debug database.")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, debug: bool, verbose: bool):
    """Chirpy store administration."""
    setup_logging(verbose)
    try:
        config = ChirpyConfig.from_env(debug=debug)
    except ConfigError as e:
        raise click.ClickException(str(e))
    ctx.obj = {"config": config}


@cli.command()
@click.option("--reset", is_flag=True, help="Overwrite an existing document.")
@click.pass_context
def init(ctx: click.Context, reset: bool):
    """Create the document if it does not exist.

    Under --debug the debug document is always emptied.
    """
    store = _open_store(ctx, reset=reset or ctx.obj["config"].debug)
    click.echo(f"Store ready: {store.file_path}")


@cli.command()
@click.pass_context
def dump(ctx: click.Context):
    """Print live posts and accounts as JSON."""
    store = _open_store(ctx)
    try:
        document = {
            "chirps": [post.to_dict() for post in store.list_posts()],
            "users": [account.to_public_dict() for account in store.list_accounts()],
        }
    except JSONStoreError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(document, indent=2))


@cli.command("create-account")
@click.argument("email")
@click.password_option()
@click.pass_context
def create_account(ctx: click.Context, email: str, password: str):
    """Register an account."""
    store = _open_store(ctx)
    try:
        account = store.create_account(email, password)
    except JSONStoreError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(account.to_public_dict()))


@cli.command()
@click.argument("account_id", type=int)
@click.pass_context
def upgrade(ctx: click.Context, account_id: int):
    """Mark an account as upgraded."""
    store = _open_store(ctx)
    try:
        store.upgrade_account(account_id)
    except DocumentStoreError as e:
        raise click.ClickException(str(e))
    click.echo(f"Account {account_id} upgraded")


@cli.command("issue-tokens")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
@click.pass_context
def issue_tokens(ctx: click.Context, email: str, password: str):
    """Log in and print an access/refresh token pair."""
    store = _open_store(ctx)
    authority = ctx.obj["config"].build_token_authority(store)
    try:
        account = store.authenticate(email, password)
    except DocumentStoreError as e:
        raise click.ClickException(str(e))
    pair = authority.issue_pair(account.id)
    click.echo(json.dumps({
        "id": account.id,
        "token": pair.access_token,
        "refresh_token": pair.refresh_token,
    }))


@cli.command()
@click.argument("token")
@click.pass_context
def revoke(ctx: click.Context, token: str):
    """Revoke a refresh token."""
    store = _open_store(ctx)
    authority = ctx.obj["config"].build_token_authority(store)
    try:
        authority.revoke(token)
    except TokenError as e:
        raise click.ClickException(str(e))
    click.echo("Token revoked")


if __name__ == "__main__":
    cli()
