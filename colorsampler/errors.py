__all__ = [
  "ColorSamplingError", "InvalidColorDepth", "InvalidCoverage", "InvalidSampleCount",
  "InvalidSamplingArea", "NoPixelData",
]


class ColorSamplingError(ValueError):
  pass


class InvalidSampleCount(ColorSamplingError):
  def __init__(self, count: int) -> None:
    super().__init__(f"颜色数量必须大于 0: {count}")
    self.count = count


class InvalidCoverage(ColorSamplingError):
  def __init__(self, coverage: float) -> None:
    super().__init__(f"采样覆盖率必须在 (0, 1] 之间: {coverage}")
    self.coverage = coverage


class InvalidColorDepth(ColorSamplingError):
  def __init__(self, color_depth: int) -> None:
    super().__init__(f"颜色深度必须在 1 到 8 之间: {color_depth}")
    self.color_depth = color_depth


class InvalidSamplingArea(ColorSamplingError):
  def __init__(self, rect: object, size: object) -> None:
    super().__init__(f"采样区域 {rect} 不在图片范围 {size} 内")
    self.rect = rect
    self.size = size


class NoPixelData(ColorSamplingError):
  pass
