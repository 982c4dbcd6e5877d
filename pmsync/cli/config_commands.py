"""CLI commands for viewing and editing pmsync settings."""

import click
import yaml

from pmsync.sdk import config

# Define the schema of allowed configuration keys and their value types
ALLOWED_CONFIG = {
    "userid": {"type": str},
    "label": {"type": str},
    "credentials": {"type": str},
    "token": {"type": str},
    "auth_port": {"type": int, "min": 0, "max": 65535},
    "list.format": {"type": str},
    "list.sort": {"type": str},
    "get.dest": {"type": str},
    "get.filename": {"type": str},
    "put.src": {"type": str},
    "fetch.workers": {"type": int, "min": 1},
}


@click.group()
def config_group():
    """Commands for managing pmsync configuration."""
    pass


@config_group.command('view')
def view_config():
    """Displays the current pmsync configuration."""
    config_data = config.load_config()
    click.echo(f"# {config.get_config_file_path()}")
    click.echo(yaml.safe_dump(config_data, default_flow_style=False))


@config_group.command('get')
@click.argument('key')
def get_config(key):
    """Prints the effective value of a dot-separated key, e.g. list.sort."""
    value = config.get_config_value(key)
    if value is None:
        raise click.UsageError(f"Configuration key '{key}' is not set.")
    if isinstance(value, dict):
        click.echo(yaml.safe_dump(value, default_flow_style=False), nl=False)
    else:
        click.echo(value)


@config_group.command('set')
@click.argument('key')
@click.argument('value')
def set_config(key, value):
    """
    Sets a configuration value for a supported key.

    \b
    Supported Keys:
      - userid, label, credentials, token, auth_port
      - list.format, list.sort
      - get.dest, get.filename, put.src
      - fetch.workers: maximum number of concurrent fetches

    \b
    Examples:
      pmsync config set label Notes/pomera_sync
      pmsync config set list.sort -date,subject
      pmsync config set fetch.workers 4
    """
    if key not in ALLOWED_CONFIG:
        allowed = ", ".join(sorted(ALLOWED_CONFIG))
        raise click.UsageError(f"Configuration key '{key}' is not supported. Supported keys: {allowed}.")

    key_schema = ALLOWED_CONFIG[key]

    if key_schema["type"] is int:
        try:
            value = int(value)
        except ValueError:
            raise click.UsageError(f"Invalid value '{value}' for key '{key}': expected an integer.")
        if "min" in key_schema and value < key_schema["min"]:
            raise click.UsageError(f"Invalid value {value} for key '{key}': must be >= {key_schema['min']}.")
        if "max" in key_schema and value > key_schema["max"]:
            raise click.UsageError(f"Invalid value {value} for key '{key}': must be <= {key_schema['max']}.")

    config.set_config_value(key, value)
    click.echo(f"✓ Set '{key}' to: {value}")
