import pytest

from p2v.physical import DataConnSchema, PhysicalMachineSchema


@pytest.fixture
def sysfs(tmp_path):
    """Fake /sys/class/net with eth0 having MAC address."""
    net = tmp_path / 'net'
    (net / 'eth0').mkdir(parents=True)
    (net / 'eth0' / 'address').write_text('52:54:00:12:34:56\n')
    return net


@pytest.fixture
def minimal():
    return PhysicalMachineSchema(
        guestname='h1',
        memory=1048576,
        vcpus=1,
        disks=['/dev/sda'],
    )


@pytest.fixture
def ports():
    return [DataConnSchema(nbd_remote_port=10000)]
