# pyright: strict
from typing import NamedTuple

'''
Packed pixel utilities.

A pixel is a 32-bit integer holding four 8-bit channels, red in the lowest byte followed by green,
blue and alpha. This is the layout of an RGBA buffer read as little-endian words.
'''


def rgba_from_channels(red: int, green: int, blue: int, alpha: int = 255) -> int:
  '''Converts a color from RGBA components to a packed pixel.'''
  return (alpha & 255) << 24 | (blue & 255) << 16 | (green & 255) << 8 | red & 255


def red_from_rgba(rgba: int) -> int:
  '''Returns the red component of a packed pixel.'''
  return rgba & 255


def green_from_rgba(rgba: int) -> int:
  '''Returns the green component of a packed pixel.'''
  return rgba >> 8 & 255


def blue_from_rgba(rgba: int) -> int:
  '''Returns the blue component of a packed pixel.'''
  return rgba >> 16 & 255


def alpha_from_rgba(rgba: int) -> int:
  '''Returns the alpha component of a packed pixel.'''
  return rgba >> 24 & 255


class Color(NamedTuple):
  '''A color with every channel normalized to [0, 1].'''
  red: float
  green: float
  blue: float
  alpha: float = 1.0

  @staticmethod
  def from_rgba(rgba: int) -> "Color":
    return Color(
      red_from_rgba(rgba) / 255,
      green_from_rgba(rgba) / 255,
      blue_from_rgba(rgba) / 255,
      alpha_from_rgba(rgba) / 255,
    )

  def to_rgba(self) -> int:
    return rgba_from_channels(
      round(self.red * 255), round(self.green * 255), round(self.blue * 255),
      round(self.alpha * 255),
    )

  def hex(self) -> str:
    rgba = self.to_rgba()
    return "#{:02x}{:02x}{:02x}{:02x}".format(
      red_from_rgba(rgba), green_from_rgba(rgba), blue_from_rgba(rgba), alpha_from_rgba(rgba),
    )
