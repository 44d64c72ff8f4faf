"""CLI dispatcher — lazy-loads command modules on demand."""
from __future__ import annotations


def dispatch_command(args, settings, command=None) -> int:
    """Route parsed args to the matching cli module, importing only on use.

    *settings* supplies defaults that the command line switches on or replaces.
    """
    if getattr(args, "version", False):
        from cli.version_cmd import cmd_version
        return cmd_version()

    from cli.load_cmd import cmd_load
    from core.env_loader import DEFAULT_FILE, LoadRequest

    request = LoadRequest(
        files=list(args.files or settings.files or [DEFAULT_FILE]),
        list_names=args.list or settings.list_names,
        verbose=args.verbose or settings.verbose,
        overwrite=args.overwrite or settings.overwrite,
    )
    return cmd_load(request, shell=args.shell, command=command)
