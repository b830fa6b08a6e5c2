# This file is part of P2V
#
# P2V is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# P2V is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with P2V.  If not, see <http://www.gnu.org/licenses/>.

"""Command line interface."""

import argparse
import logging
import sys
from typing import TextIO

import yaml
from pydantic import ValidationError

from p2v import PROGRAM_NAME, __version__
from p2v.config import Config
from p2v.exceptions import P2VError
from p2v.physical import ConversionSchema, PhysicalMachineConfig


log = logging.getLogger(__name__)
log_levels = [lv.lower() for lv in logging.getLevelNamesMapping()]


def _load_snapshot(file: TextIO) -> ConversionSchema:
    try:
        data = yaml.load(file.read(), Loader=yaml.SafeLoader)
        log.debug('Read from file: %s', data)
    except yaml.YAMLError as e:
        sys.exit(f'error: cannot parse YAML: {e}')
    if not isinstance(data, dict):
        sys.exit(f'error: {file.name}: mapping expected')
    try:
        return ConversionSchema(**data)
    except ValidationError as e:
        sys.exit(f'error: {file.name}: {e}')


def main(args: argparse.Namespace, config: Config) -> None:
    """Generate physical machine XML."""
    snapshot = _load_snapshot(args.file)
    machine = PhysicalMachineConfig(
        snapshot.config,
        snapshot.data_conns,
        arch=config['host']['arch'],
        program=PROGRAM_NAME,
        sysfs_net=config['host']['sysfs_net'],
    )
    if args.output == '-':
        sys.stdout.write(machine.to_xml())
        return
    machine.save(args.output)
    print(f'written: {args.output}')


def get_parser() -> argparse.ArgumentParser:
    """Return command line arguments parser."""
    root = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=(
            'Write XML description of physical machine for virt-v2v.'
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    root.add_argument(
        'file',
        type=argparse.FileType('r', encoding='UTF-8'),
        nargs='?',
        default='physical.yaml',
        help='physical machine snapshot [default: physical.yaml]',
    )
    root.add_argument(
        '-o',
        '--output',
        metavar='FILE',
        default='physical.xml',
        help="output file, '-' for stdout [default: physical.xml]",
    )
    root.add_argument(
        '-c',
        '--config',
        metavar='FILE',
        help=f'settings file [default: {Config.DEFAULT_CONFIG_FILE}]',
    )
    root.add_argument(
        '-l',
        '--log-level',
        type=str.lower,
        metavar='LEVEL',
        choices=log_levels,
        help='log level',
    )
    root.add_argument(
        '-V',
        '--version',
        action='version',
        version=__version__,
    )
    return root


def cli(argv: list[str] | None = None) -> None:
    """Run arguments parser."""
    root = get_parser()
    args = root.parse_args(argv)
    try:
        config = Config(args.config)
    except P2VError as e:
        sys.exit(f'error: {e}')
    log_level = args.log_level or config['log']['level']
    if isinstance(log_level, str) and log_level.lower() in log_levels:
        logging.basicConfig(
            level=logging.getLevelNamesMapping()[log_level.upper()],
            filename=config['log']['file'],
        )
    log.debug('CLI started with args: %s', args)
    try:
        main(args, config)
    except P2VError as e:
        sys.exit(f'error: {e}')
    except KeyboardInterrupt:
        sys.exit()
    finally:
        if args.file is not sys.stdin:
            args.file.close()


if __name__ == '__main__':
    cli()
