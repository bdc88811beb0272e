from pathlib import Path
from typing import Iterator, List

import pytest
from loguru import logger

from colorsampler import CONFIG, log
from colorsampler.configs import SharedConfig


@pytest.fixture(autouse=True)
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
  monkeypatch.setattr(SharedConfig, "base_dir", str(tmp_path / "configs"))
  monkeypatch.setattr(CONFIG, "cache", None)
  monkeypatch.setattr(log.CONFIG, "cache", None)
  return tmp_path / "configs"


@pytest.fixture
def log_messages() -> Iterator[List[str]]:
  messages: List[str] = []
  sink = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
  yield messages
  logger.remove(sink)
