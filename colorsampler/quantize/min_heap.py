# pyright: strict
from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, Protocol, TypeVar

'''
A binary min-heap whose items remember their own position.

Every queued item stores the slot of its entry in `heap_index`, so an item that is already queued
can have its key changed and be moved to its new place in logarithmic time without searching for it.
'''


class Heapable(Protocol):
  heap_index: Optional[int]

  @property
  def value(self) -> int: ...


T = TypeVar("T", bound=Heapable)


@dataclass
class HeapEntry(Generic[T]):
  value: int
  '''The key of `ref` when it was last inserted or updated.'''
  ref: T


class MinHeap(Generic[T]):
  def __init__(self) -> None:
    self.entries: List[HeapEntry[T]] = []

  def __len__(self) -> int:
    return len(self.entries)

  def __iter__(self) -> Iterator[T]:
    return (entry.ref for entry in self.entries)

  def insert(self, item: T) -> None:
    '''
    Insert an item, or update its key when it is already queued.

    :param item: The item to insert. Its current `value` is used as the key.
    '''
    index = item.heap_index
    if index is None:
      index = len(self.entries)
      self.entries.append(HeapEntry(item.value, item))
      item.heap_index = index
      self._down(self._up(index))
      return
    entry = self.entries[index]
    increased = item.value > entry.value
    entry.value = item.value
    if increased:
      self._down(index)
    else:
      self._up(index)

  def extract(self) -> Optional[T]:
    '''
    Remove the item with the smallest key. If more than one item shares the smallest key, which one
    is returned is unspecified.

    :return: The removed item, or None if the heap is empty.
    '''
    if not self.entries:
      return None
    root = self.entries[0]
    last = self.entries.pop()
    root.ref.heap_index = None
    if last is not root:
      self.entries[0] = last
      last.ref.heap_index = 0
      self._down(0)
    return root.ref

  def check(self) -> None:
    '''Raises AssertionError if the heap order or any reverse index is broken.'''
    for i, entry in enumerate(self.entries):
      if entry.ref.heap_index != i:
        raise AssertionError(f"entry {i} records index {entry.ref.heap_index}")
      if i > 0 and self.entries[(i - 1) // 2].value > entry.value:
        raise AssertionError(f"entry {i} is smaller than its parent")

  def _swap(self, i: int, j: int) -> None:
    entries = self.entries
    entries[i], entries[j] = entries[j], entries[i]
    entries[i].ref.heap_index = i
    entries[j].ref.heap_index = j

  def _up(self, index: int) -> int:
    entries = self.entries
    while index > 0:
      parent = (index - 1) // 2
      if entries[index].value >= entries[parent].value:
        break
      self._swap(index, parent)
      index = parent
    return index

  def _down(self, index: int) -> int:
    entries = self.entries
    count = len(entries)
    while True:
      left = index * 2 + 1
      right = left + 1
      smallest = index
      if left < count and entries[left].value < entries[smallest].value:
        smallest = left
      if right < count and entries[right].value < entries[smallest].value:
        smallest = right
      if smallest == index:
        return index
      self._swap(index, smallest)
      index = smallest
