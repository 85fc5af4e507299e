"""Command line entry point: run one lifecycle phase's hooks for a bundle.

Usage::

    python -m container_hooks prestart --bundle /run/bundles/c1 --id c1
    python -m container_hooks poststop --bundle /run/bundles/c1 --id c1 --config ./config.json

Exit codes: 0 success, 1 a hook failed, 2 configuration or spec error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from container_hooks.core.models import HookPhase

logger = logging.getLogger(__name__)

_PHASE_COMMANDS: dict[str, HookPhase] = {phase.oci_key: phase for phase in HookPhase}


def run_phase(args: argparse.Namespace) -> int:
    """Run the hooks of the phase named by ``args.command``.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 success, 1 hook failure, 2 configuration/spec error).
    """
    from container_hooks.config import get_settings
    from container_hooks.core.errors import ConfigurationError, HookError, SpecLoadError
    from container_hooks.core.logging import configure_logging
    from container_hooks.core.models import ContainerSpec
    from container_hooks.core.tracing import LoggingTracer, NoopTracer, Tracer
    from container_hooks.hooks.invoker import HookInvoker
    from container_hooks.hooks.lifecycle import run_phase_hooks
    from container_hooks.hooks.runner import HookSequenceRunner

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        json_format=settings.log_json,
        mask_sensitive=settings.log_mask_sensitive,
    )

    try:
        if args.config:
            spec = ContainerSpec.from_file(args.config)
        else:
            spec = ContainerSpec.from_bundle(args.bundle)
    except SpecLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    tracer: Tracer = LoggingTracer() if settings.trace_spans else NoopTracer()
    runner = HookSequenceRunner(
        invoker=HookInvoker(tracer=tracer, pid_source=settings.state_pid_source),
        tracer=tracer,
    )

    phase = _PHASE_COMMANDS[args.command]
    try:
        run_phase_hooks(phase, spec, args.id, args.bundle, runner=runner)
    except HookError as e:
        print(f"Error: {phase.value} hook {e.path} failed: {e}", file=sys.stderr)
        return 1

    logger.debug("%s hooks completed for container %s", phase.value, args.id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="container-hooks",
        description="Run OCI container lifecycle hooks",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Lifecycle phases",
    )

    for command, phase in _PHASE_COMMANDS.items():
        phase_parser = subparsers.add_parser(
            command,
            help=f"Run the {phase.value} hooks",
        )
        phase_parser.add_argument(
            "--bundle",
            required=True,
            help="Path to the container's OCI bundle",
        )
        phase_parser.add_argument(
            "--id",
            required=True,
            help="Container id passed to the hooks",
        )
        phase_parser.add_argument(
            "--config",
            help="OCI config.json to read hooks from (default: <bundle>/config.json)",
        )
        phase_parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable debug logging",
        )

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point with one subcommand per lifecycle phase."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from container_hooks import __version__

        print(f"container-hooks {__version__}")
        sys.exit(0)

    if args.command in _PHASE_COMMANDS:
        sys.exit(run_phase(args))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
