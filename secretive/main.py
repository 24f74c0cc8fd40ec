"""
Main CLI entry point for Secretive.

Usage:
    secretive scrub config.json -o config.scrubbed.json -s secrets.json
    secretive restore config.scrubbed.json -s secrets.json -o config.json
    secretive roundtrip config.json
    secretive generate -n 10 -o samples.json
"""

import click
import json
import logging
import sys
from pathlib import Path
from typing import Any, Tuple

from . import DEFAULT_CONFIG, __version__
from .samples.generator import SampleGenerator
from .scrub.policies import make_prefix_policy, scrub_paths
from .scrub.scrubber import Scrubber
from .secrets.store import SecretStore


def _read_json(path: str) -> Any:
    """Read a JSON document, exiting with status 1 on failure."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"Error: Failed to read {path}: {e}", err=True)
        sys.exit(1)


def _write_json(path: str, data: Any) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)


def _load_secrets(path: str) -> SecretStore:
    try:
        return SecretStore.load(path)
    except (OSError, ValueError) as e:
        click.echo(f"Error: Failed to load secrets from {path}: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              default='WARNING', help='Logging level')
def cli(log_level: str):
    """Secretive

    Reversibly scrubs string values out of JSON documents, keeping the
    originals in a separate secrets file.
    """
    logging.basicConfig(level=getattr(logging, log_level))


@cli.command()
@click.argument('input_file', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output file for the scrubbed document')
@click.option('--secrets', '-s', 'secrets_file', required=True, type=click.Path(),
              help='Output file for the secret store')
@click.option('--prefix', default=DEFAULT_CONFIG['token_prefix'],
              help='Token prefix for the default policy')
@click.option('--path', '-p', 'paths', multiple=True,
              help='Only scrub leaves at this path (repeatable)')
def scrub(input_file: str, output: str, secrets_file: str, prefix: str, paths: Tuple[str, ...]):
    """Scrub string values from a JSON document.

    Every non-empty string is replaced by PREFIX plus its path unless
    --path is given, in which case only those exact paths are scrubbed.
    """
    document = _read_json(input_file)

    if paths:
        on_value = scrub_paths(paths, prefix=prefix)
    else:
        on_value = make_prefix_policy(prefix)
    scrubber = Scrubber(on_value=on_value)

    scrubbed, secrets = scrubber.scrub(document)

    _write_json(output, scrubbed)
    secrets.save(secrets_file)

    stats = scrubber.get_stats()
    click.echo(f"Scrubbed {stats['strings_scrubbed']} of {stats['strings_visited']} strings")
    click.echo(f"Wrote {output} and {secrets_file}")


@cli.command()
@click.argument('input_file', type=click.Path(exists=True))
@click.option('--secrets', '-s', 'secrets_file', required=True, type=click.Path(exists=True),
              help='Secret store written by scrub')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output file for the restored document')
def restore(input_file: str, secrets_file: str, output: str):
    """Restore scrubbed values in a JSON document."""
    document = _read_json(input_file)
    secrets = _load_secrets(secrets_file)

    scrubber = Scrubber()
    restored = scrubber.restore(document, secrets)

    _write_json(output, restored)

    stats = scrubber.get_stats()
    click.echo(f"Restored {stats['strings_restored']} of {len(secrets)} secrets")
    click.echo(f"Wrote {output}")


@cli.command()
@click.argument('input_file', type=click.Path(exists=True))
@click.option('--prefix', default=DEFAULT_CONFIG['token_prefix'],
              help='Token prefix for the default policy')
def roundtrip(input_file: str, prefix: str):
    """Check that scrubbing then restoring a JSON document is lossless."""
    document = _read_json(input_file)

    scrubber = Scrubber(token_prefix=prefix)
    scrubbed, secrets = scrubber.scrub(document)
    restored = scrubber.restore(scrubbed, secrets)

    click.echo(f"Scrubbed {len(secrets)} strings")
    if restored != document:
        click.echo("Error: Restored document differs from input", err=True)
        sys.exit(1)
    click.echo("Round trip OK")


@cli.command()
@click.option('--count', '-n', default=10, type=int, help='Number of records')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output JSON file')
@click.option('--seed', default=DEFAULT_CONFIG['sample_seed'], type=int,
              help='Random seed for reproducibility')
def generate(count: int, output: str, seed: int):
    """Generate sample customer records to scrub."""
    generator = SampleGenerator(seed=seed)
    records = generator.generate_json(count)

    output_path = Path(output)
    _write_json(str(output_path), records)
    click.echo(f"Wrote {len(records)} records to {output_path}")


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
