"""
Signer CLI - Inspect and manage identities from the terminal.

Usage:
    signer identities
    signer create <identity>
    signer networks <identity>
    signer paths <identity> <network>
    signer derive <identity> <path> --network kusama --name Savings
    signer rename <identity> <path> <name>
    signer delete <identity> <path>

<network> accepts a network key or a path id such as "kusama".
"""

import logging
from pathlib import Path

import click

from .grouping import group_network_paths
from .models import CorruptIdentityStore, IdentityStore
from .networks import NETWORK_LIST, UNKNOWN_NETWORK_KEY
from .paths import get_path_name
from .resolver import get_existed_network_keys, get_paths_with_network_key
from .services.logging import configure_logging
from .settings import load_settings
from .utils import get_app_dir, get_logs_dir, get_settings_path
from .wallet import DerivationFailed, decrypt_seed, generate_seed_phrase

logger = logging.getLogger(__name__)


def _network_key(value: str) -> str:
    if value in NETWORK_LIST:
        return value
    for network_key, network in NETWORK_LIST.items():
        if network.path_id == value:
            return network_key
    raise click.BadParameter(f"Unknown network: {value}")


def _identity(store: IdentityStore, name: str):
    identity = store.get_identity(name)
    if identity is None:
        raise click.ClickException(f"Unknown identity: {name}")
    return identity


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path),
              default=None, help="Data directory (default: $SIGNER_HOME or ~/.signer)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, data_dir, verbose):
    """Cold-storage identity manager."""
    data_dir = data_dir or get_app_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    settings = load_settings(get_settings_path(data_dir))

    level = logging.DEBUG if verbose else getattr(logging, str(settings["log_level"]).upper(), logging.INFO)
    configure_logging(level, settings["log_retention_days"], get_logs_dir(data_dir))

    try:
        store = IdentityStore(data_dir)
    except CorruptIdentityStore as e:
        raise click.ClickException(str(e))
    ctx.obj = {"store": store, "settings": settings}


@cli.command("identities")
@click.pass_obj
def list_identities(obj):
    """List identities and their account counts."""
    identities = obj["store"].get_identities()
    if not identities:
        click.echo("No identities. Create one with `signer create <name>`.")
        return
    for identity in identities:
        click.echo(f"{identity.name}\t{len(identity.meta)} account(s)")


@cli.command("create")
@click.argument("name")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--words", type=click.Choice(["12", "24"]), default="24")
@click.option("--derivation-password", default="", help="Password used for Substrate derivation")
@click.pass_obj
def create_identity(obj, name, password, words, derivation_password):
    """Create an identity with a fresh seed phrase."""
    seed_phrase = generate_seed_phrase(int(words))
    try:
        obj["store"].create_identity(name, seed_phrase, password, derivation_password)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo("Write down your seed phrase and keep it offline:")
    click.echo(seed_phrase)


@cli.command("networks")
@click.argument("identity_name")
@click.pass_obj
def list_networks(obj, identity_name):
    """List networks an identity has accounts on."""
    identity = _identity(obj["store"], identity_name)
    for network_key in get_existed_network_keys(identity):
        if network_key == UNKNOWN_NETWORK_KEY and not obj["settings"]["show_unknown_network"]:
            continue
        network = NETWORK_LIST.get(network_key)
        title = network.title if network else network_key
        count = len(get_paths_with_network_key(identity, network_key))
        click.echo(f"{title}\t{count} account(s)\t{network_key}")


@cli.command("paths")
@click.argument("identity_name")
@click.argument("network")
@click.pass_obj
def list_paths(obj, identity_name, network):
    """Show an identity's accounts on one network, grouped."""
    identity = _identity(obj["store"], identity_name)
    network_key = _network_key(network)
    for group in group_network_paths(identity, network_key):
        if len(group.paths) == 1:
            path = group.paths[0]
            click.echo(f"{get_path_name(path, identity)}\t{path}")
            continue
        click.echo(f"[{group.title}]")
        for path in group.paths:
            click.echo(f"  {get_path_name(path, identity)}\t{path}")


@cli.command("derive")
@click.argument("identity_name")
@click.argument("path")
@click.option("--network", "network", required=True, help="Network key or path id")
@click.option("--name", default="", help="Account name")
@click.option("--password", prompt=True, hide_input=True, help="Identity password")
@click.option("--derivation-password", default=None,
              help="Substrate path password (default: the identity's own)")
@click.pass_obj
def derive(obj, identity_name, path, network, name, password, derivation_password):
    """Derive a new account and record it."""
    store = obj["store"]
    identity = _identity(store, identity_name)
    network_key = _network_key(network)
    try:
        seed_phrase = decrypt_seed(identity.encrypted_seed, password)
        meta = store.derive_new_path(identity_name, path, seed_phrase, network_key,
                                     name, derivation_password)
    except DerivationFailed as e:
        logger.warning(f"Derivation of {path!r} failed: {e.cause}")
        raise click.ClickException(f"Derivation failed: {e.cause}")
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"{meta.address}\t{path}")


@cli.command("rename")
@click.argument("identity_name")
@click.argument("path")
@click.argument("name")
@click.pass_obj
def rename(obj, identity_name, path, name):
    """Rename an account."""
    try:
        obj["store"].rename_path(identity_name, path, name)
    except ValueError as e:
        raise click.ClickException(str(e))


@cli.command("delete")
@click.argument("identity_name")
@click.argument("path")
@click.confirmation_option(prompt="Delete this account?")
@click.pass_obj
def delete(obj, identity_name, path):
    """Forget an account."""
    try:
        obj["store"].delete_path(identity_name, path)
    except ValueError as e:
        raise click.ClickException(str(e))


def main():
    """Console entry point."""
    cli()


if __name__ == "__main__":
    main()
