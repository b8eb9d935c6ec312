"""
    Copyright 2018 Inmanta

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

        http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.

    Contact: code@inmanta.com

    Command line development guidelines
    ###################################

    do's and don'ts
    ----------------
    MUST NOT: sys.exit => raise click.exceptions.Exit
    SHOULD NOT: print( => use logger for messages, only click.echo for final output
"""
import logging
import shutil
import sys
from typing import List, Optional, Tuple

import click
import texttable

from bracket.ast import CompilerException
from bracket.config import Config
from bracket.logging import BracketLoggerConfig, convert_verbosity
from bracket.program import parse
from bracket.reporter import format_diagnostic

LOGGER = logging.getLogger(__name__)


def print_table(header: List[str], rows: List[List[str]], data_type: Optional[List[str]] = None) -> None:
    click.echo(get_table(header, rows, data_type))


def get_table(header: List[str], rows: List[List[str]], data_type: Optional[List[str]] = None) -> str:
    """
    Returns a table that would fit in the current terminal.
    """
    width, _ = shutil.get_terminal_size()

    table = texttable.Texttable(max_width=width)
    table.set_deco(texttable.Texttable.HEADER | texttable.Texttable.BORDER | texttable.Texttable.VLINES)
    if data_type is not None:
        table.set_cols_dtype(data_type)
    table.header(header)
    for row in rows:
        table.add_row(row)
    return table.draw()


@click.group(help="Parser for bracket programs")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log level for messages going to the console. Default is warnings only. -v info, -vv debug and -vvv trace",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Use this config file, on top of ~/.bracket.cfg and .bracket.cfg",
)
def cmd(verbose: int, config_file: Optional[str]) -> None:
    BracketLoggerConfig.get_instance(sys.stderr).set_log_level(convert_verbosity(verbose))
    Config.load_config(config_file)


@cmd.command(help="Parse bracket programs and report the first syntax error in each of them")
@click.option("--json", "as_json", is_flag=True, help="Report errors as JSON documents instead of diagnostics")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def check(as_json: bool, files: Tuple[str, ...]) -> None:
    failed = 0
    for filename in files:
        with open(filename, "r", encoding="utf-8", newline="") as fh:
            code = fh.read()

        try:
            program = parse(code, filename)
        except CompilerException as e:
            failed += 1
            if as_json:
                click.echo(e.export().model_dump_json(), err=True)
            else:
                click.echo(format_diagnostic(e, code), err=True)
            continue

        LOGGER.info("Parsed %d subs from %s", len(program), filename)
        click.echo("%s: ok, %d top-level items" % (filename, len(program.body.children)))

    if failed:
        LOGGER.debug("%d of %d files failed to parse", failed, len(files))
        raise click.exceptions.Exit(1)


@cmd.command(name="config", help="Show all config options with their current value")
def show_config() -> None:
    rows = []
    for section, options in sorted(Config.get_config_options().items()):
        for name, option in sorted(options.items()):
            rows.append([f"{section}.{name}", str(option.get()), option.get_default_desc(), option.documentation])
    print_table(["Option", "Value", "Default", "Description"], rows, ["t", "t", "t", "t"])


def main() -> None:
    cmd()


if __name__ == "__main__":
    main()
