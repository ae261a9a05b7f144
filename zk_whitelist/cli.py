"""
Command-Line Interface for zk-whitelist

Generates zero-knowledge whitelist proofs for a list of Ethereum addresses
by driving an external zk-SNARK toolchain.
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from zk_whitelist import __version__
from zk_whitelist.pipeline import (
    PipelineDriver,
    RunSummary,
    WhitelistError,
    encode_address,
    ensure_circuit_file,
    load_config,
    load_proof_file,
)
from zk_whitelist.pipeline.circuit import CIRCUIT_VARIANTS, DEFAULT_CIRCUIT_VARIANT
from zk_whitelist.pipeline.constants import DEFAULT_CIRCUIT_PATH, PROOF_ARTIFACT_NAME

POLICY_CHOICE = click.Choice(["strict", "tolerant"], case_sensitive=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_summary(summary: RunSummary) -> None:
    table = Table(title="Whitelist proofs")
    table.add_column("Address")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")
    for address in summary.written:
        table.add_row(address, "[green]proved[/green]", "")
    for skipped in summary.skipped:
        table.add_row(skipped.address, "[yellow]skipped[/yellow]", f"{skipped.stage}: {skipped.reason}")
    Console().print(table)


@click.group()
@click.version_option(version=__version__)
def main():
    """
    zk-whitelist - batch zero-knowledge whitelist proofs

    Compiles the whitelist circuit, runs the toolchain setup and produces
    one proof per address in the address list.
    """
    pass


@main.command()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML file with pipeline settings')
@click.option('--workdir', type=click.Path(file_okay=False),
              help='Toolchain working directory (default: current directory)')
@click.option('--addresses', type=click.Path(), help='Address list, one address per line')
@click.option('--output', type=click.Path(), help='Result JSON file')
@click.option('--circuit', type=click.Path(), help='Circuit source file')
@click.option('--toolchain', type=str, help='Toolchain executable (default: zokrates)')
@click.option('--timeout', type=float, help='Per-invocation timeout in seconds')
@click.option('--witness-policy', type=POLICY_CHOICE, help='On compute-witness failure: abort or skip')
@click.option('--proof-policy', type=POLICY_CHOICE, help='On generate-proof failure: abort or skip')
@click.option('--decode-policy', type=POLICY_CHOICE, help='On undecodable address: abort or skip')
@click.option('--export-verifier/--no-export-verifier', default=None,
              help='Export the verifier contract after setup')
@click.option('--circuit-variant', type=click.Choice(sorted(CIRCUIT_VARIANTS)),
              help='Circuit text written when the circuit file is absent')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def run(
    config_path,
    workdir,
    addresses,
    output,
    circuit,
    toolchain,
    timeout,
    witness_policy,
    proof_policy,
    decode_policy,
    export_verifier,
    circuit_variant,
    verbose,
):
    """
    Generate proofs for every address in the address list.

    Examples:

        # Defaults: whitelist.zok, addresses.txt -> address-proof.json
        zk-whitelist run

        # Skip addresses whose witness cannot be computed
        zk-whitelist run --witness-policy tolerant
    """
    _configure_logging(verbose)
    try:
        config = load_config(
            config_path,
            workdir=workdir,
            addresses_path=addresses,
            output_path=output,
            circuit_path=circuit,
            toolchain_binary=toolchain,
            timeout=timeout,
            witness_policy=witness_policy,
            proof_policy=proof_policy,
            decode_policy=decode_policy,
            export_verifier=export_verifier,
            circuit_variant=circuit_variant,
        )
        summary = PipelineDriver(config).run()
    except WhitelistError as e:
        click.echo(click.style(f"\n✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    _print_summary(summary)
    click.echo(click.style(
        f"✓ {len(summary.written)} of {summary.attempted} address(es) proved, "
        f"results saved to: {summary.output_path}",
        fg="green",
    ))
    if summary.skipped:
        click.echo(click.style(f"⚠️  {len(summary.skipped)} address(es) skipped", fg="yellow"))


@main.command()
@click.argument('address')
def encode(address):
    """Print the compute-witness arguments for ADDRESS."""
    try:
        inputs = encode_address(address)
    except WhitelistError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)
    click.echo(" ".join(inputs.arguments()))


@main.command(name="inspect-proof")
@click.argument('path', type=click.Path(dir_okay=False), default=PROOF_ARTIFACT_NAME)
def inspect_proof(path):
    """Parse a toolchain proof file and print its result entry."""
    try:
        proof_file = load_proof_file(path)
    except WhitelistError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)
    click.echo(json.dumps(proof_file.to_entry(), indent=2))


@main.command(name="init-circuit")
@click.option('--circuit', type=click.Path(dir_okay=False), default=DEFAULT_CIRCUIT_PATH,
              help='Circuit source file')
@click.option('--variant', type=click.Choice(sorted(CIRCUIT_VARIANTS)),
              default=DEFAULT_CIRCUIT_VARIANT, help='Circuit text to write')
def init_circuit(circuit, variant):
    """Write the whitelist circuit unless the file already exists."""
    try:
        created = ensure_circuit_file(Path(circuit), variant)
    except WhitelistError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)
    if created:
        click.echo(click.style(f"✓ Circuit written to: {circuit}", fg="green"))
    else:
        click.echo(f"Circuit already present: {circuit}")


@main.command()
def version():
    """Show version information."""
    click.echo(f"\nzk-whitelist v{__version__}")


if __name__ == "__main__":
    main()
