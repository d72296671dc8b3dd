"""CLI entry point for inspecting orders and quoting fills offline."""

import argparse
import logging
from pathlib import Path

import yaml

from amount_engine.calc.axis import current_axis
from amount_engine.codec.extra_data import split_amount_data
from amount_engine.config.loader import config_hash, get_config_value, load_config, set_config_value
from amount_engine.dispatch.calculator import AmountCalculator
from amount_engine.dispatch.phase_selector import select_phase
from amount_engine.models.common import unix_now
from amount_engine.models.context import FillContext
from amount_engine.models.errors import CalculationError, NoActivePhase
from amount_engine.models.order import FillSide, Order
from amount_engine.models.phase import PHASE_LIST_AXES

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="amount-engine",
        description="Execution-amount calculation engine",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # quote
    quote_p = sub.add_parser("quote", help="Quote a fill against an order")
    quote_p.add_argument("--order", required=True, help="Order YAML path")
    quote_p.add_argument("--side", choices=["making", "taking"], default="making")
    quote_p.add_argument("--amount", type=int, required=True)
    quote_p.add_argument("--taker", required=True)
    quote_p.add_argument("--remaining", type=int, default=None)
    quote_p.add_argument("--timestamp", type=int, default=None)

    # phases
    phases_p = sub.add_parser("phases", help="Decode amount data and show phases")
    phases_p.add_argument("data", help="Hex amount data (calculator ++ extra data)")
    phases_p.add_argument("--timestamp", type=int, default=None)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "quote":
        return _cmd_quote(config, args)
    elif args.command == "phases":
        return _cmd_phases(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def load_order(path: str | Path) -> Order:
    """Load an order from YAML. Amount data fields are hex strings."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    for key in ("making_amount_data", "taking_amount_data"):
        value = raw.get(key) or ""
        raw[key] = _hex_to_bytes(value)
    return Order(**raw)


def _hex_to_bytes(value: str) -> bytes:
    value = str(value).strip()
    if value.startswith("0x"):
        value = value[2:]
    return bytes.fromhex(value)


def _cmd_quote(config, args) -> int:
    calculator = AmountCalculator.from_config(config)
    try:
        order = load_order(args.order)
    except (OSError, TypeError, ValueError) as e:
        print(f"Error: could not load order: {e}")
        return 1

    try:
        if args.side == FillSide.MAKING:
            result = calculator.get_taking_amount(
                order, args.taker, args.amount, args.remaining, timestamp=args.timestamp
            )
            print(f"taking_amount={result}")
        else:
            result = calculator.get_making_amount(
                order, args.taker, args.amount, args.remaining, timestamp=args.timestamp
            )
            print(f"making_amount={result}")
    except CalculationError as e:
        print(f"Rejected: {e.kind} {e}")
        return 2
    return 0


def _cmd_phases(config, args) -> int:
    calculator = AmountCalculator.from_config(config)
    try:
        reference, extra_data = split_amount_data(_hex_to_bytes(args.data))
        kind = calculator.registry.resolve(reference)
        if kind not in PHASE_LIST_AXES:
            print(f"Calculator {reference}: single strategy {kind}")
            return 0
        phase_list = calculator.decode_phase_list(extra_data, PHASE_LIST_AXES[kind])
    except (CalculationError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    timestamp = unix_now() if args.timestamp is None else args.timestamp
    ctx = FillContext(timestamp=timestamp, feeds=calculator.feeds)
    required = " (required)" if phase_list.oracle_required else ""
    print(f"Axis: {phase_list.mode} | Oracle: {phase_list.oracle or '-'}{required}")
    try:
        axis = current_axis(phase_list, ctx, calculator.selector.axis_decimals)
        active, _ = select_phase(phase_list, axis)
    except NoActivePhase:
        active = None
    except CalculationError as e:
        print(f"Axis unavailable: {e}")
        active = None

    for i, phase in enumerate(phase_list.phases):
        marker = "*" if i == active else " "
        print(f" {marker} [{phase.start}, {phase.end}) {phase.strategy}")
    if active is None:
        print("No active phase")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        print(f"Config hash: {config_hash(config)}")
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
