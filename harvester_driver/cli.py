"""
This module purpose is to handle command line interface
"""

import argparse
import json
import logging
import sys

import yaml

from . import __version__
from .config_manager import ConfigSource, OptionResolver
from .drivers import HarvesterDriver
from .encoding import decode_maybe_base64
from .errors import ConfigError, OptionError
from .options import HARVESTER_SCHEMA
from .utils import info, success, warning, error, heading, table

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def main(argv=None):
    """
    main: entry point, returns the process exit status
    """
    parser = argparse.ArgumentParser(
        prog="harvester-driver",
        description="harvester-driver - Harvester machine driver options"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING",
                        help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # harvester-driver flags
    prepare_cmd_flags(subparsers)

    # harvester-driver check
    prepare_cmd_check(subparsers)

    # harvester-driver decode <value>
    prepare_cmd_decode(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "flags":
        return cmd_flags(args)
    elif args.command == "check":
        return cmd_check(args)
    elif args.command == "decode":
        return cmd_decode(args)
    return 1

def prepare_cmd_flags(subparsers):
    """
    prepare_cmd_flags: prepares parser for subcommand and args for `flags`
    """
    flags_p = subparsers.add_parser("flags", help="List the options the driver accepts")
    flags_p.add_argument("--format", choices=["table", "yaml", "json"], default="table",
                         help="Output format (default: table)")

def prepare_cmd_check(subparsers):
    """
    prepare_cmd_check: prepares parser for subcommand and args for `check`
    """
    check_p = subparsers.add_parser(
        "check", help="Resolve options from every source and validate them"
    )
    check_p.add_argument("--config", help="Path to harvester.yaml (default: ./harvester.yaml)")
    check_p.add_argument("--env-file", help="Path to .env file (default: ./.env)")

    options_g = check_p.add_argument_group("driver options")
    for spec in HARVESTER_SCHEMA:
        flag = f"--{spec.name}"
        dest = option_dest(spec.name)
        if spec.kind == "bool":
            options_g.add_argument(flag, dest=dest, action="store_true", default=None,
                                   help=f"{spec.description} [${spec.env_var}]")
        else:
            options_g.add_argument(flag, dest=dest, default=None, metavar="VALUE",
                                   help=f"{spec.description} [${spec.env_var}]")

def prepare_cmd_decode(subparsers):
    """
    prepare_cmd_decode: prepares parser for subcommand and args for `decode`
    """
    decode_p = subparsers.add_parser(
        "decode", help="Show how a base64-capable option value is interpreted"
    )
    decode_p.add_argument("value", help="Plain or base64-encoded value")

def option_dest(name):
    return "opt_" + name.replace("-", "_")

def cmd_flags(args):
    """
    cmd_flags: lists the option catalog
    """
    specs = list(HARVESTER_SCHEMA)
    if args.format == "table":
        rows = [
            (spec.name, spec.env_var, "" if spec.default is None else spec.default, spec.description)
            for spec in specs
        ]
        table(["OPTION", "ENV VAR", "DEFAULT", "DESCRIPTION"], rows)
        return 0

    catalog = [
        {
            "name": spec.name,
            "env_var": spec.env_var,
            "kind": spec.kind,
            "default": spec.default,
            "description": spec.description,
        }
        for spec in specs
    ]
    if args.format == "json":
        print(json.dumps(catalog, indent=2))
    else:
        print(yaml.safe_dump(catalog, default_flow_style=False, sort_keys=False), end="")
    return 0

def cmd_check(args):
    """
    cmd_check: resolves, populates and validates the driver configuration
    """
    command_line = {}
    for spec in HARVESTER_SCHEMA:
        value = getattr(args, option_dest(spec.name))
        if value is not None:
            command_line[spec.name] = value

    resolver = OptionResolver(
        config_path=args.config,
        env_file=args.env_file,
        command_line=command_line,
    )
    driver = HarvesterDriver()
    try:
        resolver.load()
    except OptionError as e:
        error(str(e))
        return 1
    for key in resolver.ignored:
        warning(f"Ignoring unknown option {key} in {resolver.config_path}")

    try:
        driver.set_config_from_flags(resolver)
    except ConfigError as e:
        error(f"{e} (--{e.option})")
        return 1
    except OptionError as e:
        error(str(e))
        return 1

    changed = [
        name for name in sorted(resolver.sources)
        if resolver.sources[name] != ConfigSource.DEFAULTS
    ]
    if changed:
        info("Options set: " + ", ".join(changed))

    heading("Resolved configuration")
    resolved = driver.config.as_dict(mask_secrets=True)
    if driver.swarm.swarm_master:
        resolved["swarm"] = vars(driver.swarm)
    print(yaml.safe_dump(resolved, default_flow_style=False, sort_keys=False), end="")
    success("Configuration is valid")
    return 0

def cmd_decode(args):
    """
    cmd_decode: prints a value as the driver would store it
    """
    print(decode_maybe_base64(args.value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
