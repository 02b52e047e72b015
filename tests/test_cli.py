import pytest

from pacman4k.__main__ import parse_args, settings_from_args


def test_defaults():
    settings = settings_from_args(parse_args([]))
    assert settings.start_level == 1
    assert settings.scale == 2
    assert settings.fps == 60
    assert settings.audio_enabled


def test_flags():
    args = parse_args(["--level", "7", "--scale", "3", "--fps", "30", "--mute",
                       "--log-level", "DEBUG"])
    settings = settings_from_args(args)
    assert (settings.start_level, settings.scale, settings.fps) == (7, 3, 30)
    assert not settings.audio_enabled
    assert args.log_level == "DEBUG"


@pytest.mark.parametrize("argv", [["--level", "0"], ["--scale", "0"], ["--fps", "-1"],
                                  ["--log-level", "LOUD"]])
def test_rejects_bad_values(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)
