import sys
from typing import List, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field

from .. import configs

'''
Log sinks for the sampler.

The package only ever calls `logger`; nothing is written anywhere until the host either configures
loguru itself or calls `init()`, which installs the sinks listed in `configs/log.yaml`. Calling
`init()` again replaces the sinks it installed before and leaves everyone else's alone.
'''

Level = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class Sink(BaseModel):
  level: Level = "INFO"
  file: Optional[str] = None
  '''Path of the log file, standard error if None.'''
  format: str = "<g>{time:HH:mm:ss}</g>|<lvl>{level:8}</lvl>| <c>{name}</c> - {message}"
  colorize: Optional[bool] = None
  only_sampler: bool = True
  '''Drop records that don't come from this package.'''


class Config(BaseModel):
  sinks: List[Sink] = Field(default_factory=lambda: [Sink()])


CONFIG = configs.SharedConfig("log", Config, "eager")
sink_ids: List[int] = []
_PACKAGE = __name__.split(".")[0]


@CONFIG.onload()
def config_onload(_: Optional[Config], cur: Config) -> None:
  for id in sink_ids:
    try:
      logger.remove(id)
    except ValueError:  # 已经被宿主程序用 logger.remove() 移除
      pass
  sink_ids.clear()
  for sink in cur.sinks:
    sink_ids.append(logger.add(
      sink.file or sys.stderr,
      level=sink.level,
      format=sink.format,
      colorize=sink.colorize,
      filter=_PACKAGE if sink.only_sampler else None,
    ))


def init() -> None:
  CONFIG.load()
