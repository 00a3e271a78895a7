# main.py
"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Main Script (Wiring)

"""
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from constant.const_config import LOG_FOLDER
from libs.dataclass.conceptual_objects import scenario_from_json_str
from prompts.prompts_template import get_playwright_test_generator_instructions
from pw_tool_ext.config import AppConfig, load_app_config, log_level_for, parse_capabilities
from pw_tool_ext.context import Context
from pw_tool_ext.server import ToolServer

logger = logging.getLogger()


# region Logging Initiation

def init_logging(cfg: AppConfig):
    os.makedirs(os.path.dirname(cfg.logging.logFile) or LOG_FOLDER, exist_ok=True)

    logger.setLevel(log_level_for(cfg.logging.verbosity))
    if not logger.handlers:
        # stdout carries the MCP transport, so logs only go to file
        fh = logging.FileHandler(cfg.logging.logFile, mode="w", encoding="utf-8")

        fmt = logging.Formatter(
            "%(asctime)s %(levelname)s "
            "[%(name)s %(filename)s:%(lineno)d %(funcName)s] %(message)s"
        )

        fh.setFormatter(fmt)
        logger.addHandler(fh)
    logger.info("Logging Started For Playwright Test Authoring Tools - ")


# endregion


# region wiring

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Playwright test authoring tools over MCP")
    parser.add_argument("--env-file", help="Path to a .env file with PW_TOOLS_* overrides")
    parser.add_argument("--headed", action="store_true", help="Run the browser headed")
    parser.add_argument("--test-id-attribute", help="Default test id attribute for getByTestId locators")
    parser.add_argument("--capability", action="append",
                        help="Enable only the given tool capability (core, testing); repeatable")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="Serve the tools over stdio (default)")
    instructions = sub.add_parser("instructions", help="Print test generation instructions for a scenario file")
    instructions.add_argument("--scenario", required=True, help="Scenario JSON: {name, description, steps}")
    return parser


def apply_cli_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.headed:
        cfg.browser.headless = False
    if args.test_id_attribute:
        cfg.testing.testIdAttributeName = args.test_id_attribute
    if args.capability:
        cfg.capabilities = parse_capabilities(",".join(args.capability))
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    # region Initiate Configuration
    cfg = apply_cli_overrides(load_app_config(args.env_file), args)
    init_logging(cfg)
    # endregion

    if args.command == "instructions":
        scenario = scenario_from_json_str(Path(args.scenario).read_text(encoding="utf-8"))
        logger.info(f'Instructions requested for scenario - {scenario.name}')
        print(get_playwright_test_generator_instructions(scenario))
        return 0

    server = ToolServer(Context(cfg))
    asyncio.run(server.serve_stdio())
    return 0


# endregion


if __name__ == "__main__":
    sys.exit(main())
