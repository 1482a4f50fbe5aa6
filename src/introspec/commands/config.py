"""Config commands -- view and modify the user settings file.

Provides the ``introspec config`` sub-command group. Settings are
persisted as :class:`~introspec.models.DocumenterSettings` in the
introspec config directory.
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from introspec.exceptions import ConfigError, InvalidUsageError
from introspec.models import DocumenterSettings
from introspec.output import info, print_table, success

config_app = typer.Typer(no_args_is_help=True)

_LIST_KEYS = ("replacement_verbs", "default_tags")


def _display(value: Any) -> str:  # noqa: ANN401
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


@config_app.command("show")
def config_show() -> None:
    """Show the effective settings.

    Includes project config and ``INTROSPEC_*`` environment overrides,
    so the output is what ``introspec spec`` would use.

    Example::

        introspec config show
        introspec --json config show
    """
    from introspec.config import get_config_dir, resolve_settings

    settings = resolve_settings()
    info(f"Config directory: {get_config_dir()}")
    rows = [[key, _display(value)] for key, value in settings.model_dump(mode="json").items()]
    print_table(["key", "value"], rows, title="Settings")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting name, e.g. 'collection_strategy'."),
    value: str = typer.Argument(help="Value to set. Lists are comma-separated."),
) -> None:
    """Set a value in the user settings file.

    Args:
        key: A :class:`~introspec.models.DocumenterSettings` field name.
        value: New value. ``replacement_verbs`` and ``default_tags`` take a
            comma-separated list; an empty string clears optional fields.

    Raises:
        InvalidUsageError: If *key* is not a setting.
        ConfigError: If the value fails validation.

    Example::

        introspec config set collection_strategy union
        introspec config set replacement_verbs GET,POST
    """
    from introspec.config import load_user_settings, save_user_settings

    if key not in DocumenterSettings.model_fields:
        raise InvalidUsageError(f"Unknown config key: {key}")

    coerced: Any
    if key in _LIST_KEYS:
        coerced = [v.strip() for v in value.split(",") if v.strip()]
        if key == "replacement_verbs":
            coerced = [v.upper() for v in coerced]
    elif value == "" and DocumenterSettings.model_fields[key].default is None:
        coerced = None
    else:
        coerced = value

    data = load_user_settings().model_dump()
    data[key] = coerced
    try:
        settings = DocumenterSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for {key}: {exc}") from exc

    save_user_settings(settings)
    success(f"Set {key} = {_display(coerced)}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the user settings file to defaults.

    Example::

        introspec config reset --force
    """
    from introspec.config import save_user_settings

    if not force and not typer.confirm("Reset all settings to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_user_settings(DocumenterSettings())
    success("Settings reset to defaults.")
