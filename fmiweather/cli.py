"""CLI entry point for the weather report service."""

import argparse
import asyncio
import logging

from pydantic import BaseModel

from fmiweather.config.defaults import KNOWN_STATIONS
from fmiweather.config.loader import get_config_value, load_config
from fmiweather.config.schema import LogLevel, ServerConfig
from fmiweather.pipeline.report_pipeline import ReportPipeline

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fmiweather",
        description="Daily temperature reports for FMI weather stations",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Override configured log level",
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP server")
    serve_p.add_argument("--host", help="Listen address")
    serve_p.add_argument("--port", type=int, help="Listen port")
    serve_p.add_argument("--sid", help="Default FMI station id")

    # report
    report_p = sub.add_parser("report", help="Print one report and exit")
    report_p.add_argument("--sid", help="FMI station id")
    report_p.add_argument("--year", help="Year, YYYY")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. server.port")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)
    level = args.log_level or config.server.log_level.value
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")

    if args.command == "serve":
        return _cmd_serve(config, args, level)
    elif args.command == "report":
        return _cmd_report(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args, level: str) -> int:
    import uvicorn

    from fmiweather.app import create_app

    update = {}
    if args.host:
        update["host"] = args.host
    if args.port:
        update["port"] = args.port
    if args.sid:
        update["default_station_id"] = args.sid
    if update:
        config = config.model_copy(
            update={"server": ServerConfig(**{**config.server.model_dump(), **update})}
        )

    logging.getLogger(__name__).info(
        "default fmisid: %s (%s)",
        config.server.default_station_id,
        KNOWN_STATIONS.get(config.server.default_station_id, "unknown station"),
    )
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=level.lower(),
    )
    return 0


def _cmd_report(config, args) -> int:
    pipeline = ReportPipeline(config)
    outcome = asyncio.run(pipeline.run(args.sid, args.year))
    print(outcome.body, end="" if outcome.ok else "\n")
    return 0 if outcome.ok else 1


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e.args[0]}")
            return 1
        if isinstance(value, BaseModel):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    print("Error: use 'config show' or 'config get <key>'")
    return 1
