"""ACME DNS-01 challenge record commands."""

from pathlib import Path

import httpx
import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from alidnshook.config import (
    HookConfig,
    load_config,
    load_env_settings,
    resolve_credentials,
)
from alidnshook.providers.dns.aliyun import AliyunAPIError, AliyunDNSProvider
from alidnshook.providers.dns.base import DNSProvider

console = Console()

ConfigOption = typer.Option(
    None, "--config", "-c", help="Path to alidnshook.yaml or appsettings.json"
)


def split_record_name(name: str) -> tuple[str, str]:
    """Split a record name into host prefix and parent domain.

    "_acme-challenge.example.com" -> ("_acme-challenge", "example.com")
    """
    host, sep, domain = name.partition(".")
    if not sep or not host or not domain:
        raise ValueError(
            f"Invalid record name '{name}': expected <host>.<domain>"
        )
    return host, domain


def create_challenge(provider: DNSProvider, name: str, value: str) -> httpx.Response:
    """Create the TXT record for a challenge."""
    host, domain = split_record_name(name)
    return provider.add_txt_record(domain, host, value)


def delete_challenge(
    provider: DNSProvider, name: str, value: str | None = None
) -> httpx.Response | None:
    """Delete the TXT record for a challenge.

    With ``value``, the record holding that token is preferred when several
    records share the name. Returns None without calling the delete API
    when no record is found.
    """
    host, domain = split_record_name(name)
    record_id = provider.find_txt_record_id(domain, host, value)
    if not record_id:
        return None
    return provider.delete_record(record_id)


def get_config(config_path: Path | None) -> HookConfig:
    """Load the configuration, exiting on a missing or invalid file."""
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except (ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]✗[/red] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)


def get_dns_provider(config: HookConfig) -> DNSProvider:
    """Get the configured DNS provider."""
    credentials = resolve_credentials(config, load_env_settings())
    if credentials is None:
        console.print("[red]✗[/red] Aliyun credentials not configured")
        console.print(
            "  Set ALIDNSHOOK_ACCESS_KEY_ID and ALIDNSHOOK_ACCESS_KEY_SECRET"
        )
        raise typer.Exit(1)

    return AliyunDNSProvider(
        credentials=credentials,
        endpoint=config.aliyun.endpoint,
        api_version=config.aliyun.api_version,
        timeout=config.aliyun.timeout,
    )


def _check_name(name: str) -> None:
    try:
        split_record_name(name)
    except ValueError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _print_response(response: httpx.Response) -> None:
    console.print("Response:")
    console.print(response.text, markup=False, highlight=False, soft_wrap=True)
    if not response.is_success:
        raise typer.Exit(1)


def create(
    name: str | None = typer.Argument(
        None, help="Record name, e.g. _acme-challenge.example.com"
    ),
    value: str | None = typer.Argument(None, help="TXT record value"),
    config_path: Path | None = ConfigOption,
) -> None:
    """Create the challenge TXT record."""
    config = get_config(config_path)

    # Without arguments, fall back to the record configured in the file
    name = name or config.aliyun.domain_name
    value = value or config.aliyun.record_value
    if not name or not value:
        console.print("[red]✗[/red] Record name and value are required")
        console.print("  Pass them as arguments or set domain_name and record_value")
        raise typer.Exit(1)

    _check_name(name)
    provider = get_dns_provider(config)

    try:
        response = create_challenge(provider, name, value)
    except httpx.HTTPError as e:
        console.print(f"[red]✗[/red] Failed to create record: {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        provider.close()

    _print_response(response)


def delete(
    name: str = typer.Argument(
        ..., help="Record name, e.g. _acme-challenge.example.com"
    ),
    value: str | None = typer.Argument(
        None, help="TXT record value, used to pick among records with the same name"
    ),
    config_path: Path | None = ConfigOption,
) -> None:
    """Delete the challenge TXT record."""
    config = get_config(config_path)
    _check_name(name)
    provider = get_dns_provider(config)

    try:
        response = delete_challenge(provider, name, value)
    except AliyunAPIError as e:
        console.print(f"[red]✗[/red] Record lookup failed: {escape(str(e))}")
        console.print(e.body, markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]✗[/red] Failed to delete record: {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        provider.close()

    if response is None:
        console.print("Record ID not found.")
        return

    _print_response(response)
