import itertools
import math
import random
from typing import TYPE_CHECKING, Iterable, Optional

from .errors import InvalidColorDepth, InvalidCoverage, InvalidSampleCount

if TYPE_CHECKING:
  from .quantize.quantizer_octree import ColorOctree

__all__ = ["sample", "stride", "validate"]

_END = object()


def validate(count: int, coverage: float, color_depth: int) -> None:
  if count <= 0:
    raise InvalidSampleCount(count)
  if not 0 < coverage <= 1:
    raise InvalidCoverage(coverage)
  if not 1 <= color_depth <= 8:
    raise InvalidColorDepth(color_depth)


def stride(rng: random.Random, coverage: float) -> int:
  '''
  Distance to the next sampled pixel. Every pixel is picked with probability `coverage`
  independently, so the distance is geometric with mean 1 / coverage.
  '''
  return 1 + int(math.log(1.0 - rng.random()) / math.log(1.0 - coverage))


def sample(
  pixels: Iterable[int], tree: "ColorOctree", coverage: float = 1.0,
  rng: Optional[random.Random] = None,
) -> int:
  '''
  Feed pixels into `tree`, skipping some of them when `coverage` is less than 1.

  :return: Number of pixels inserted.
  '''
  if coverage == 1:
    return tree.insert_all(pixels)
  if not 0 < coverage < 1:
    raise InvalidCoverage(coverage)
  if rng is None:
    rng = random.Random()
  it = iter(pixels)
  count = 0
  while True:
    pixel = next(itertools.islice(it, stride(rng, coverage) - 1, None), _END)
    if pixel is _END:
      return count
    tree.insert(pixel)  # type: ignore
    count += 1
