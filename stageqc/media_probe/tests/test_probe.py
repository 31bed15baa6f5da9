import json
import subprocess
from unittest.mock import patch

import pytest
from PIL import Image

from stageqc.media_probe.gate import UnsupportedMediaType
from stageqc.media_probe.service import MediaProbeService, ProbeError


def test_probe_image(tmp_path):
    path = tmp_path / "stage.png"
    Image.new("RGB", (4140, 1080)).save(path)

    asset = MediaProbeService().probe(path)

    assert (asset.width, asset.height) == (4140, 1080)
    assert asset.kind == "image"
    assert asset.file_name == "stage.png"
    assert asset.file_size == path.stat().st_size
    assert asset.duration_seconds is None


def test_probe_corrupt_image(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"not a jpeg")
    with pytest.raises(ProbeError):
        MediaProbeService().probe(path)


def test_probe_rejects_ungated_file(tmp_path):
    path = tmp_path / "clip.webm"
    path.write_bytes(b"\x00")
    with pytest.raises(UnsupportedMediaType):
        MediaProbeService().probe(path)


def test_probe_missing_file(tmp_path):
    with pytest.raises(ProbeError):
        MediaProbeService().probe(tmp_path / "missing.mp4")


@patch("subprocess.run")
def test_probe_video(mock_subprocess, tmp_path):
    path = tmp_path / "show.mp4"
    path.write_bytes(b"\x00" * 64)
    mock_output = {
        "format": {"duration": "42.5"},
        "streams": [
            {"index": 0, "codec_type": "audio"},
            {"index": 1, "codec_type": "video", "width": 4140, "height": 1080},
        ],
    }
    mock_subprocess.return_value.stdout = json.dumps(mock_output)
    mock_subprocess.return_value.returncode = 0

    asset = MediaProbeService(ffprobe_bin="ffprobe").probe(path)

    assert (asset.width, asset.height) == (4140, 1080)
    assert asset.kind == "video"
    assert asset.duration_seconds == 42.5
    cmd = mock_subprocess.call_args[0][0]
    assert cmd[0] == "ffprobe"
    assert cmd[-1] == str(path)


@patch("subprocess.run")
def test_probe_video_stream_duration_wins(mock_subprocess, tmp_path):
    path = tmp_path / "show.mov"
    path.write_bytes(b"\x00")
    mock_subprocess.return_value.stdout = json.dumps({
        "format": {"duration": "99"},
        "streams": [{"codec_type": "video", "width": 1920, "height": 1080, "duration": "10.0"}],
    })
    asset = MediaProbeService().probe(path)
    assert asset.duration_seconds == 10.0


@patch("subprocess.run")
def test_probe_video_garbage_output(mock_subprocess, tmp_path):
    path = tmp_path / "bad.mp4"
    path.write_bytes(b"\x00")
    mock_subprocess.return_value.stdout = "Garbage"
    with pytest.raises(ProbeError):
        MediaProbeService().probe(path)


@patch("subprocess.run")
def test_probe_video_ffprobe_missing(mock_subprocess, tmp_path):
    path = tmp_path / "a.mp4"
    path.write_bytes(b"\x00")
    mock_subprocess.side_effect = FileNotFoundError("ffprobe")
    with pytest.raises(ProbeError):
        MediaProbeService().probe(path)


@patch("subprocess.run")
def test_probe_video_ffprobe_error(mock_subprocess, tmp_path):
    path = tmp_path / "a.mp4"
    path.write_bytes(b"\x00")
    mock_subprocess.side_effect = subprocess.CalledProcessError(1, ["ffprobe"])
    with pytest.raises(ProbeError):
        MediaProbeService().probe(path)


@patch("subprocess.run")
def test_probe_video_without_video_stream(mock_subprocess, tmp_path):
    path = tmp_path / "audio_only.mp4"
    path.write_bytes(b"\x00")
    mock_subprocess.return_value.stdout = json.dumps({"streams": [{"codec_type": "audio"}]})
    with pytest.raises(ProbeError):
        MediaProbeService().probe(path)


@patch("subprocess.run")
def test_probe_video_zero_dimensions_never_reach_qc(mock_subprocess, tmp_path):
    path = tmp_path / "zero.mp4"
    path.write_bytes(b"\x00")
    mock_subprocess.return_value.stdout = json.dumps({
        "streams": [{"codec_type": "video", "width": 0, "height": 1080, "duration": "N/A"}],
    })
    with pytest.raises(ProbeError):
        MediaProbeService().probe(path)
