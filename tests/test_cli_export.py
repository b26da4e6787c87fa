import json
import subprocess
import sys
from pathlib import Path

from PIL import Image

from engine import BubbleEngine

ROOT = Path(__file__).resolve().parents[1]


def _cli(*args):
    cmd = [sys.executable, str(ROOT / "cli.py"), *args]
    return subprocess.run(cmd, check=True, capture_output=True, text=True, cwd=ROOT)


def test_cli_export_writes_image(tmp_path):
    field_path = tmp_path / "field.json"
    BubbleEngine(rows=4, seed=2).save_json(str(field_path))

    png = tmp_path / "out" / "field.png"
    _cli("export", "--field", str(field_path), "--png", str(png))

    assert png.exists()
    with Image.open(png) as img:
        assert img.size == (480, 720)


def test_cli_new_shoot_and_summary(tmp_path):
    field_path = tmp_path / "field.json"
    _cli("new", "--rows", "3", "--seed", "9", "--out", str(field_path))
    data = json.loads(field_path.read_text())
    assert len(data["bubbles"]) == 12 + 11 + 12

    out = _cli("shoot", str(field_path), "240", "100", "--color", "blue").stdout
    assert "popped" in out
    after = json.loads(field_path.read_text())
    assert after["next_id"] == data["next_id"] + 1

    out = _cli("summary", str(field_path)).stdout
    assert "bubbles" in out
