import struct
from unittest import mock

from slmon.components import volume


def _fake_ioctl(devmask, level):
    def fake(fd, request, arg):
        if request == volume.SOUND_MIXER_READ_DEVMASK:
            return struct.pack("i", devmask)
        if request == volume.mixer_read(0):
            return struct.pack("i", level)
        raise OSError(25, "Inappropriate ioctl for device")

    return fake


def test_missing_device(tmp_path):
    assert volume.vol_perc(str(tmp_path / "mixer")) is None


def test_regular_file_is_not_a_mixer(tmp_path):
    path = tmp_path / "mixer"
    path.write_bytes(b"")
    assert volume.vol_perc(str(path)) is None


def test_reads_left_channel_level(tmp_path):
    path = tmp_path / "mixer"
    path.write_bytes(b"")
    with mock.patch.object(volume.fcntl, "ioctl", side_effect=_fake_ioctl(1, (60 << 8) | 60)):
        assert volume.vol_perc(str(path)) == "60"


def test_only_low_byte_is_used(tmp_path):
    path = tmp_path / "mixer"
    path.write_bytes(b"")
    with mock.patch.object(volume.fcntl, "ioctl", side_effect=_fake_ioctl(1, (99 << 8) | 42)):
        assert volume.vol_perc(str(path)) == "42"


def test_no_master_channel(tmp_path):
    path = tmp_path / "mixer"
    path.write_bytes(b"")
    with mock.patch.object(volume.fcntl, "ioctl", side_effect=_fake_ioctl(0b10, 50)):
        assert volume.vol_perc(str(path)) is None


def test_mixer_read_requests_are_distinct():
    requests = {volume.mixer_read(i) for i in range(len(volume.SOUND_DEVICE_NAMES))}
    assert len(requests) == len(volume.SOUND_DEVICE_NAMES)
    assert volume.SOUND_MIXER_READ_DEVMASK not in requests