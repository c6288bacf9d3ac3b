from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("MPLBACKEND", "Agg")


def write_record(path: Path, **fields) -> Path:
    path.write_text(json.dumps(fields), encoding="utf-8")
    return path


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def tub_file(tmp_path: Path) -> Path:
    return write_record(
        tmp_path / "test-tub.json",
        Name="Test",
        WidthCm=25,
        HeightCm=50,
        CornerRadiusPercent=12,
    )


@pytest.fixture
def big_tub_file(tmp_path: Path) -> Path:
    return write_record(
        tmp_path / "big-tub.json",
        name="Big",
        widthCm=40,
        heightCm=70,
        cornerRadiusPercent=10,
    )
