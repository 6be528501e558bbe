import pytest

from sui_stablecoin_scripts.utils import config


@pytest.fixture(autouse=True)
def logs_dir(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setattr(config, "LOGS_DIR", path)
    return path
