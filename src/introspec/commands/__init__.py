"""Built-in CLI sub-commands for introspec.

* :mod:`~introspec.commands.spec` -- generate documentation for a
  service host.
* :mod:`~introspec.commands.config` -- view and modify user settings.

``spec`` is a plain callback registered directly on the root app;
``config`` is a :class:`typer.Typer` sub-application.
"""
