import random

import pytest

from colorsampler import imutil, sampler
from colorsampler.color_utils import rgba_from_channels
from colorsampler.errors import (
  InvalidColorDepth, InvalidCoverage, InvalidSampleCount, InvalidSamplingArea,
)
from colorsampler.quantize.quantizer_octree import ColorOctree


class NoRandom(random.Random):
  def random(self) -> float:
    raise AssertionError("全量采样不应使用随机数")


def image_pixels(count: int):
  return [rgba_from_channels(i % 256, i // 256 % 256, (i * 7) % 256) for i in range(count)]


def test_full_scan():
  pixels = image_pixels(1000)
  tree = ColorOctree(4)
  assert sampler.sample(pixels, tree, 1.0, NoRandom()) == 1000
  assert tree.total_weight == 1000


def test_full_scan_equals_insert():
  pixels = image_pixels(5000)
  sampled = ColorOctree(4)
  sampler.sample(pixels, sampled)
  inserted = ColorOctree(4)
  inserted.insert_all(pixels)
  assert sampled.bucket_weights() == inserted.bucket_weights()
  assert sampled.quantize(6) == inserted.quantize(6)


@pytest.mark.parametrize("coverage", [0.1, 0.25, 0.5, 0.9])
def test_partial_coverage(coverage: float):
  pixels = image_pixels(40000)
  tree = ColorOctree(4)
  count = sampler.sample(pixels, tree, coverage, random.Random(0))
  assert tree.total_weight == count
  assert abs(count / len(pixels) - coverage) < 0.02


def test_partial_coverage_reproducible():
  pixels = image_pixels(2000)
  first = ColorOctree(4)
  second = ColorOctree(4)
  sampler.sample(pixels, first, 0.3, random.Random(42))
  sampler.sample(pixels, second, 0.3, random.Random(42))
  assert first.bucket_weights() == second.bucket_weights()


def test_partial_coverage_iterator():
  tree = ColorOctree(2)
  count = sampler.sample(iter(image_pixels(1000)), tree, 0.5, random.Random(1))
  assert 0 < count < 1000


def test_partial_coverage_default_rng():
  tree = ColorOctree(2)
  assert sampler.sample(image_pixels(100), tree, 0.5) <= 100


def test_empty_stream():
  tree = ColorOctree(4)
  assert sampler.sample([], tree, 0.5, random.Random(0)) == 0
  assert sampler.sample([], tree) == 0


def test_stride():
  rng = random.Random(5)
  strides = [sampler.stride(rng, 0.2) for _ in range(20000)]
  assert min(strides) >= 1
  assert abs(sum(strides) / len(strides) - 5) < 0.2


@pytest.mark.parametrize("coverage", [0, -0.5, 1.5])
def test_sample_invalid_coverage(coverage: float):
  with pytest.raises(InvalidCoverage):
    sampler.sample([0], ColorOctree(), coverage)


def test_validate():
  sampler.validate(1, 1.0, 1)
  sampler.validate(10, 0.01, 8)
  with pytest.raises(InvalidSampleCount):
    sampler.validate(0, 1.0, 4)
  with pytest.raises(InvalidSampleCount):
    sampler.validate(-3, 1.0, 4)
  with pytest.raises(InvalidCoverage):
    sampler.validate(1, 0, 4)
  with pytest.raises(InvalidCoverage):
    sampler.validate(1, 1.01, 4)
  with pytest.raises(InvalidColorDepth):
    sampler.validate(1, 1.0, 0)
  with pytest.raises(InvalidColorDepth):
    sampler.validate(1, 1.0, 9)


def test_check_region():
  imutil.check_region((0, 0, 10, 20), (10, 20))
  imutil.check_region((2, 3, 4, 5), (10, 20))
  for rect in [(0, 0, 11, 20), (-1, 0, 5, 5), (5, 5, 5, 6), (0, 10, 10, 21), (4, 4, 2, 8)]:
    with pytest.raises(InvalidSamplingArea):
      imutil.check_region(rect, (10, 20))


def test_region_helpers_live_with_image_code():
  assert not hasattr(sampler, "check_region")
  assert imutil.check_region.__module__ == "colorsampler.imutil"
  assert "colorsampler.sampler" not in {
    getattr(value, "__module__", None) for value in vars(imutil).values()
  }
