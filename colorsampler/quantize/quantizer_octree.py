# pyright: strict
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from ..color_utils import Color, alpha_from_rgba, blue_from_rgba, green_from_rgba, red_from_rgba
from ..errors import InvalidColorDepth
from .min_heap import MinHeap

'''
An image quantizer that sorts pixels into an octree, one bit of red, green and blue per level, and
then repeatedly folds the lightest bucket into its parent until few enough buckets remain.

Buckets are kept in a flat list and refer to each other by their position in it.
'''

_MAX_DEPTH = 8


@dataclass(eq=False)
class Bucket:
  parent: Optional[int] = None
  child_slot: Optional[int] = None
  red: int = 0
  green: int = 0
  blue: int = 0
  alpha: int = 0
  weight: int = 0
  children: List[Optional[int]] = field(default_factory=lambda: [None] * 8)
  heap_index: Optional[int] = None

  @property
  def value(self) -> int:
    return self.weight

  @property
  def is_leaf(self) -> bool:
    return all(child is None for child in self.children)

  @staticmethod
  def classify(pixel: int, level: int) -> int:
    '''
    :param pixel: Packed RGBA pixel.
    :param level: 1 for the most significant bit, up to the color depth.
    :return: Child slot, red bit | green bit << 1 | blue bit << 2.
    '''
    shift = _MAX_DEPTH - level
    red = pixel >> shift & 1
    green = pixel >> (shift + 8) & 1
    blue = pixel >> (shift + 16) & 1
    return red | green << 1 | blue << 2

  def accumulate(self, pixel: int) -> None:
    self.red += red_from_rgba(pixel)
    self.green += green_from_rgba(pixel)
    self.blue += blue_from_rgba(pixel)
    self.alpha += alpha_from_rgba(pixel)
    self.weight += 1

  def average_color(self) -> Color:
    if self.weight == 0:
      raise ValueError("空的颜色桶没有平均颜色")
    color = Color(
      self.red / self.weight / 255,
      self.green / self.weight / 255,
      self.blue / self.weight / 255,
      self.alpha / self.weight / 255,
    )
    assert all(0 <= channel <= 1 for channel in color)
    return color

  def fold(self, nodes: List["Bucket"]) -> None:
    '''
    Move the statistics of this bucket into its parent and detach it from the tree.

    :param nodes: The list this bucket and its parent belong to.
    '''
    if self.parent is None or self.child_slot is None:
      logger.warning("试图折叠根节点")
      return
    parent = nodes[self.parent]
    parent.red += self.red
    parent.green += self.green
    parent.blue += self.blue
    parent.alpha += self.alpha
    parent.weight += self.weight
    parent.children[self.child_slot] = None
    self.red = self.green = self.blue = self.alpha = self.weight = 0


class ColorOctree:
  def __init__(self, color_depth: int = 4) -> None:
    if not 1 <= color_depth <= _MAX_DEPTH:
      raise InvalidColorDepth(color_depth)
    self.color_depth = color_depth
    self.nodes: List[Bucket] = [Bucket()]
    self.heap = MinHeap[Bucket]()

  @property
  def root(self) -> Bucket:
    return self.nodes[0]

  @property
  def node_count(self) -> int:
    '''Number of buckets that currently hold pixels.'''
    return len(self.heap)

  @property
  def total_weight(self) -> int:
    return sum(bucket.weight for bucket in self.heap)

  def insert(self, pixel: int) -> None:
    '''Insert 1 pixel into the octree and update the heap.'''
    nodes = self.nodes
    index = 0
    for level in range(1, self.color_depth + 1):
      node = nodes[index]
      slot = Bucket.classify(pixel, level)
      child = node.children[slot]
      if child is None:
        child = len(nodes)
        nodes.append(Bucket(index, slot))
        node.children[slot] = child
      index = child
    bucket = nodes[index]
    bucket.accumulate(pixel)
    self.heap.insert(bucket)

  def insert_all(self, pixels: Iterable[int]) -> int:
    count = 0
    for pixel in pixels:
      self.insert(pixel)
      count += 1
    return count

  def fold_min(self) -> bool:
    '''
    Fold the lightest leaf bucket upwards until an occupied or non-leaf ancestor is reached. The
    ancestor is queued with its new weight.

    Buckets that still have children can't be folded yet. They are taken out while the next leaf is
    searched for and put back afterwards.

    :return: False if no bucket could be folded.
    '''
    skipped: List[Bucket] = []
    leaf = self.heap.extract()
    while leaf is not None and not leaf.is_leaf:
      skipped.append(leaf)
      leaf = self.heap.extract()
    if leaf is not None:
      current = leaf
      while current.is_leaf and current.parent is not None:
        parent = self.nodes[current.parent]
        occupied = parent.weight > 0
        current.fold(self.nodes)
        current = parent
        if occupied:
          break
      # 孤立的根节点无处折叠，不再放回
      if current is not leaf:
        self.heap.insert(current)
    for bucket in skipped:
      self.heap.insert(bucket)
    return leaf is not None

  def reduce(self, max_colors: int) -> None:
    '''Fold buckets until at most `max_colors` remain.'''
    while len(self.heap) > max_colors:
      if not self.fold_min():
        logger.warning(f"无法继续折叠颜色桶，剩余 {len(self.heap)} 个")
        break

  def bucket_weights(self) -> List[Tuple[Color, int]]:
    ''':return: Average color and weight of every queued bucket, heaviest first.'''
    result = [(bucket.average_color(), bucket.weight) for bucket in self.heap]
    result.sort(key=lambda x: x[1], reverse=True)
    return result

  def sorted_colors(self) -> List[Color]:
    return [color for color, _ in self.bucket_weights()]

  def quantize(self, max_colors: int) -> List[Color]:
    '''
    Pare down the octree to `max_colors` buckets and return the remaining colors.

    :param max_colors: The maximum number of colors to be returned.
    :return: Colors sorted by weight, heaviest first. Fewer colors are returned if fewer buckets
             were ever created.
    '''
    self.reduce(max_colors)
    return self.sorted_colors()


def quantize(pixels: Iterable[int], max_colors: int, color_depth: int = 4) -> List[Color]:
  '''
  :param pixels: Colors in packed RGBA format.
  :param max_colors: The number of colors to divide the image into. A lower number of colors may be
                     returned.
  :param color_depth: Bits per channel used to sort pixels into buckets, from 1 to 8.
  :return: Colors sorted by the number of pixels they represent, heaviest first.
  '''
  tree = ColorOctree(color_depth)
  tree.insert_all(pixels)
  return tree.quantize(max_colors)
