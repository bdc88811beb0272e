import os
from typing import List, Optional, Protocol, Tuple, Type, TypeVar, Union

from PIL import Image

from .color_utils import rgba_from_channels
from .errors import InvalidSamplingArea, NoPixelData

__all__ = [
  "AnyPath", "PixelAccess", "Rect", "Size", "check_region", "load", "open_image", "pixels",
]

AnyPath = Union[str, "os.PathLike[str]"]
Rect = Tuple[int, int, int, int]
Size = Tuple[int, int]
T = TypeVar("T")


class PixelAccess(Protocol[T]):
  def __getitem__(self, xy: Tuple[int, int]) -> T: ...


def load(im: Image.Image, type: Type[T]) -> PixelAccess[T]:
  return im.load()  # type: ignore


def check_region(rect: Rect, size: Size) -> None:
  '''
  :param rect: (left, top, right, bottom), right and bottom exclusive like Pillow's crop box.
  :param size: (width, height) of the image.
  '''
  left, top, right, bottom = rect
  width, height = size
  if not (0 <= left < right <= width and 0 <= top < bottom <= height):
    raise InvalidSamplingArea(rect, size)


def open_image(path: AnyPath) -> Image.Image:
  try:
    im = Image.open(path)
    im.load()
  except OSError as e:  # 包括 UnidentifiedImageError
    raise NoPixelData(f"无法读取图片: {path}") from e
  return im


def pixels(im: Image.Image, rect: Optional[Rect] = None) -> List[int]:
  '''
  Decode an image into packed RGBA pixels, row by row.

  :param rect: (left, top, right, bottom) sub-region to read, the whole image if None.
  '''
  if rect is not None:
    check_region(rect, im.size)
    im = im.crop(rect)
  if im.width == 0 or im.height == 0:
    raise NoPixelData(f"图片没有像素: {im.size}")
  # P、LA 等模式的 Alpha 通道也要保留，所以统一转换成 RGBA
  im = im.convert("RGBA")
  px = load(im, Tuple[int, int, int, int])
  result: List[int] = []
  for y in range(im.height):
    for x in range(im.width):
      r, g, b, a = px[x, y]
      result.append(rgba_from_channels(r, g, b, a))
  return result
