import subprocess
from unittest import mock

import pytest

from hyprline.models import VolumeInfo
from hyprline.volume import PipewireVolume, VolumeError, parse_volume_output


class FakeWpctl:
    def __init__(self, reply=b"Volume: 0.30\n", returncode=0):
        self.calls = []
        self.reply = reply
        self.returncode = returncode

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        if args[1] == "get-volume":
            return subprocess.CompletedProcess(args, 0, stdout=self.reply, stderr=b"")
        return subprocess.CompletedProcess(args, self.returncode, stdout=b"", stderr=b"")


def _patched(fake):
    return mock.patch("hyprline.volume.subprocess.run", side_effect=fake)


def test_parse_plain_volume():
    assert parse_volume_output("Volume: 0.45") == VolumeInfo(volume=45, muted=False)


def test_parse_muted_volume():
    info = parse_volume_output("Volume: 0.45 [MUTED]\n")
    assert info.muted is True
    assert info.volume == parse_volume_output("Volume: 0.45").volume


@pytest.mark.parametrize("output", ["", "Volume:", "Volume: abc", "Volume: 1_0"])
def test_parse_rejects_bad_output(output):
    assert parse_volume_output(output) is None


def test_parse_clamps_out_of_range():
    assert parse_volume_output("Volume: -0.5").volume == 0
    assert parse_volume_output("Volume: 9.0").volume == 255


def test_set_volume_caps_and_refreshes():
    fake = FakeWpctl()
    seen = []
    vol = PipewireVolume()
    with _patched(fake):
        vol.start_monitoring(lambda: seen.append(1))
        vol.set_volume(150)
        vol.stop()
    assert fake.calls[1] == ["wpctl", "set-volume", "@DEFAULT_AUDIO_SINK@", "1.00"]
    assert vol.get_volume_info() == parse_volume_output("Volume: 0.30")
    assert seen == [1]


def test_set_mute_arguments():
    fake = FakeWpctl()
    vol = PipewireVolume()
    with _patched(fake):
        vol.set_mute(True)
        vol.set_mute(False)
        vol.toggle_mute()
    commands = [call for call in fake.calls if call[1] == "set-mute"]
    assert commands == [
        ["wpctl", "set-mute", "@DEFAULT_AUDIO_SINK@", "1"],
        ["wpctl", "set-mute", "@DEFAULT_AUDIO_SINK@", "0"],
        ["wpctl", "set-mute", "@DEFAULT_AUDIO_SINK@", "toggle"],
    ]
    assert vol.get_volume_info() == VolumeInfo(volume=30, muted=False)


def test_failed_command_raises_and_keeps_cache():
    fake = FakeWpctl(returncode=1)
    vol = PipewireVolume()
    with _patched(fake):
        with pytest.raises(VolumeError):
            vol.set_volume(50)
    assert vol.get_volume_info() is None


def test_missing_wpctl_raises():
    vol = PipewireVolume()
    with mock.patch("hyprline.volume.subprocess.run", side_effect=FileNotFoundError("wpctl")):
        with pytest.raises(VolumeError):
            vol.toggle_mute()
        assert vol.refresh() is None


def test_negative_volume_rejected():
    with pytest.raises(ValueError):
        PipewireVolume().set_volume(-1)


def test_refresh_notifies_only_on_change():
    fake = FakeWpctl()
    seen = []
    vol = PipewireVolume(poll_interval=3600)
    with _patched(fake):
        vol.start_monitoring(lambda: seen.append(1))
        first = vol.refresh()
        fake.reply = b"Volume: 0.30 [MUTED]\n"
        second = vol.refresh()
        vol.stop()
    assert first == vol.get_volume_info() or second == vol.get_volume_info()
    assert second.muted is True
    assert seen == [1]


def test_start_monitoring_reads_initial_state():
    fake = FakeWpctl(reply=b"Volume: 0.30 [MUTED]\n")
    vol = PipewireVolume(poll_interval=3600)
    with _patched(fake):
        vol.start_monitoring(lambda: None)
        vol.stop()
    assert vol.get_volume_info() == parse_volume_output("Volume: 0.30 [MUTED]")
    assert fake.calls[0] == ["wpctl", "get-volume", "@DEFAULT_AUDIO_SINK@"]