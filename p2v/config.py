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

"""Configuration loader."""

__all__ = ['Config', 'SettingsSchema']

import copy
import os
import platform
import tomllib
from collections import UserDict
from pathlib import Path
from typing import ClassVar

from .abstract import EntityModel
from .exceptions import ConfigLoaderError
from .utils import dictutil


class LogConfigSchema(EntityModel):
    """Logger congif schema."""

    level: str | None = None
    file: str | None = None


class HostConfigSchema(EntityModel):
    """Host properties schema."""

    arch: str
    sysfs_net: str


class SettingsSchema(EntityModel):
    """Configuration file schema."""

    log: LogConfigSchema
    host: HostConfigSchema


class Config(UserDict):
    """
    UserDict for storing configuration.

    Environment variables prefix is ``P2V_``. Environment variables
    have higher proirity then configuration file.

    :cvar Path DEFAULT_CONFIG_FILE: :file:`/etc/p2v/p2v.toml`
    :cvar dict DEFAULT_CONFIGURATION:
    """

    DEFAULT_CONFIG_FILE = Path('/etc/p2v/p2v.toml')
    DEFAULT_CONFIGURATION: ClassVar[dict] = {
        'log': {
            'level': None,
            'file': None,
        },
        'host': {
            'arch': platform.machine(),
            'sysfs_net': '/sys/class/net',
        },
    }

    def __init__(self, file: Path | None = None):
        """
        Initialise Config.

        :param file: Path to configuration file. If `file` is None
            use default path from :var:`Config.DEFAULT_CONFIG_FILE`.
        """
        self.file = Path(file) if file else self.DEFAULT_CONFIG_FILE
        try:
            if self.file.exists():
                with self.file.open('rb') as configfile:
                    loaded = tomllib.load(configfile)
            else:
                loaded = {}
        except tomllib.TOMLDecodeError as etoml:
            raise ConfigLoaderError(
                f'Bad TOML syntax: {self.file}: {etoml}'
            ) from etoml
        except (OSError, ValueError) as eread:
            raise ConfigLoaderError(
                f'Config read error: {self.file}: {eread}'
            ) from eread
        config = dictutil.override(
            copy.deepcopy(self.DEFAULT_CONFIGURATION), loaded
        )
        environ = {'log': {}, 'host': {}}
        if arch := os.getenv('P2V_ARCH'):
            environ['host']['arch'] = arch
        if sysfs_net := os.getenv('P2V_SYSFS_NET'):
            environ['host']['sysfs_net'] = sysfs_net
        if log_level := os.getenv('P2V_LOG'):
            environ['log']['level'] = log_level
        dictutil.override(config, {k: v for k, v in environ.items() if v})
        try:
            SettingsSchema(**config)
        except ValueError as e:
            raise ConfigLoaderError(
                f'Invalid config: {self.file}: {e}'
            ) from e
        super().__init__(config)
