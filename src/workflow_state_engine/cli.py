"""CLI entrypoint: run the REST server or check a definition file offline."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from workflow_state_engine import __version__
from workflow_state_engine.engine.config import EngineSettings
from workflow_state_engine.engine.errors import InvalidDefinition
from workflow_state_engine.engine.validation import validate_definition
from workflow_state_engine.logging import configure_logging
from workflow_state_engine.server.config import ServerSettings
from workflow_state_engine.server.models import DefinitionModel

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-engine",
        description="Finite-state workflow engine with a JSON REST API",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-state-engine {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the REST API server")
    serve.add_argument("--host", default=None, help="Bind address (defaults to WORKFLOW_HOST)")
    serve.add_argument(
        "--port", type=int, default=None, help="Bind port (defaults to WORKFLOW_PORT)"
    )

    validate = subparsers.add_parser(
        "validate", help="Validate a workflow definition JSON file without storing it"
    )
    validate.add_argument("file", type=Path, help="Path to a definition JSON document")
    validate.add_argument(
        "--strict",
        action="store_true",
        help="Also check id uniqueness and state references (see WORKFLOW_STRICT_DEFINITIONS)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ServerSettings()
        engine_settings = EngineSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    if args.command == "validate":
        return _validate(args.file, strict=args.strict or engine_settings.strict_definitions)

    configure_logging(settings.log_level)
    return _serve(settings, engine_settings, host=args.host, port=args.port)


def _validate(path: Path, *, strict: bool) -> int:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        definition = DefinitionModel.model_validate(raw).to_domain()
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Could not read definition from {path}:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    try:
        validate_definition(definition, strict=strict)
    except InvalidDefinition as e:
        for reason in e.reasons:
            print(f"INVALID: {reason}")
        return 1

    print(f"OK: definition '{definition.id}' is valid")
    return 0


def _serve(
    settings: ServerSettings,
    engine_settings: EngineSettings,
    *,
    host: str | None,
    port: int | None,
) -> int:
    import uvicorn

    from workflow_state_engine.server.app import create_app

    app = create_app(settings, engine_settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Starting server", extra={"host": bind_host, "port": bind_port})
    # log_config=None keeps the JSON root handler installed by configure_logging.
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
