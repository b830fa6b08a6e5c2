import platform

import pytest

from p2v.config import Config
from p2v.exceptions import ConfigLoaderError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('P2V_ARCH', 'P2V_SYSFS_NET', 'P2V_LOG'):
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_file_is_missing(tmp_path):
    config = Config(tmp_path / 'missing.toml')
    assert config['host']['arch'] == platform.machine()
    assert config['host']['sysfs_net'] == '/sys/class/net'
    assert config['log'] == {'level': None, 'file': None}


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / 'p2v.toml'
    path.write_text('[host]\narch = "ppc64le"\n\n[log]\nlevel = "debug"\n')
    config = Config(path)
    assert config['host']['arch'] == 'ppc64le'
    assert config['host']['sysfs_net'] == '/sys/class/net'
    assert config['log']['level'] == 'debug'


def test_defaults_are_not_modified(tmp_path):
    path = tmp_path / 'p2v.toml'
    path.write_text('[host]\narch = "s390x"\n')
    Config(path)
    assert Config.DEFAULT_CONFIGURATION['host']['arch'] != 's390x'


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / 'p2v.toml'
    path.write_text('[host]\narch = "ppc64le"\n')
    monkeypatch.setenv('P2V_ARCH', 'riscv64')
    monkeypatch.setenv('P2V_SYSFS_NET', '/tmp/net')
    monkeypatch.setenv('P2V_LOG', 'info')
    config = Config(path)
    assert config['host']['arch'] == 'riscv64'
    assert config['host']['sysfs_net'] == '/tmp/net'
    assert config['log']['level'] == 'info'


def test_bad_toml(tmp_path):
    path = tmp_path / 'p2v.toml'
    path.write_text('[host\n')
    with pytest.raises(ConfigLoaderError, match='Bad TOML syntax'):
        Config(path)


def test_unknown_option(tmp_path):
    path = tmp_path / 'p2v.toml'
    path.write_text('[host]\nbogus = 1\n')
    with pytest.raises(ConfigLoaderError, match='Invalid config'):
        Config(path)


def test_wrong_section_type(tmp_path):
    path = tmp_path / 'p2v.toml'
    path.write_text('log = "debug"\n')
    with pytest.raises(ConfigLoaderError, match='Invalid config'):
        Config(path)
