"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~introspec.exceptions.IntrospecError` subclass.

Example::

    $ introspec spec myapp.api:host
    $ echo $?
    4   # EXIT_HOST_LOAD_ERROR -- the target could not be imported
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or a required collaborator was missing."""

EXIT_HOST_LOAD_ERROR = 4
"""The service host named on the command line could not be imported."""
