import random
from typing import List, Optional, Union

from loguru import logger
from PIL import Image
from pydantic import BaseModel, Field

from . import imutil, log, sampler
from .color_utils import Color
from .configs import SharedConfig
from .errors import (
  ColorSamplingError, InvalidColorDepth, InvalidCoverage, InvalidSampleCount, InvalidSamplingArea,
  NoPixelData,
)
from .quantize.quantizer_octree import ColorOctree

__all__ = [
  "CONFIG", "Color", "ColorOctree", "ColorSamplingError", "Config", "InvalidColorDepth",
  "InvalidCoverage", "InvalidSampleCount", "InvalidSamplingArea", "NoPixelData", "init",
  "sample_colors",
]


class Config(BaseModel):
  count: int = Field(8, gt=0)
  color_depth: int = Field(4, ge=1, le=8)
  coverage: float = Field(1.0, gt=0, le=1)
  seed: Optional[int] = None


CONFIG = SharedConfig("colorsampler", Config)


def init() -> None:
  '''
  Install the log sinks described by `configs/log.yaml`, standard error at INFO by default.

  Applications that set up loguru on their own don't need to call this.
  '''
  log.init()


def sample_colors(
  image: Union[Image.Image, imutil.AnyPath],
  count: Optional[int] = None,
  color_depth: Optional[int] = None,
  coverage: Optional[float] = None,
  rect: Optional[imutil.Rect] = None,
  rng: Optional[random.Random] = None,
) -> List[Color]:
  '''
  Samples colors from an image to find up to `count` prominent colors.

  :param image: A Pillow image or a path to one.
  :param count: The maximum number of colors to be returned.
  :param color_depth: Bits per channel used to group similar colors, from 1 to 8.
  :param coverage: Fraction of pixels to sample, 1 reads every pixel.
  :param rect: (left, top, right, bottom) sub-region to sample, the whole image if None.
  :param rng: Random source for partial coverage.
  :return: Colors sorted by how many sampled pixels they represent, heaviest first. Fewer colors
           are returned if the image has fewer distinct buckets.
  '''
  config = CONFIG()
  if count is None:
    count = config.count
  if color_depth is None:
    color_depth = config.color_depth
  if coverage is None:
    coverage = config.coverage
  sampler.validate(count, coverage, color_depth)
  if not isinstance(image, Image.Image):
    image = imutil.open_image(image)
  pixels = imutil.pixels(image, rect)
  if rng is None and coverage < 1:
    rng = random.Random(config.seed)
  tree = ColorOctree(color_depth)
  sampled = sampler.sample(pixels, tree, coverage, rng)
  colors = tree.quantize(count)
  logger.debug(
    f"从 {len(pixels)} 个像素中采样了 {sampled} 个，"
    f"得到 {len(colors)} 种颜色（深度 {color_depth}，覆盖率 {coverage}）",
  )
  return colors
