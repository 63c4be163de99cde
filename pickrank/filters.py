"""
Per-scanline predictive filters (PNG filter method 0).

Each row of the inflated image data starts with a filter
type byte. Decoding reverses the filter using the previous
*reconstructed* row as context. The first row has no prior
row and all of its "up" neighbors are zero.

Every function here reads from its input rows and returns
a freshly allocated output row. Inputs are never modified.
"""
from typing import Optional
from enum import IntEnum

import numpy as np

from .headers import UnsupportedFilterType

BYTES_PER_PIXEL = 4

class FilterType(IntEnum):
  NONE = 0
  SUB = 1
  UP = 2
  AVERAGE = 3
  PAETH = 4

def as_row(scanline) -> np.ndarray:
  if isinstance(scanline, (bytes, bytearray, memoryview)):
    return np.frombuffer(scanline, dtype=np.uint8)
  return np.asarray(scanline, dtype=np.uint8).reshape(-1)

def _prior_row(prior, n:int) -> np.ndarray:
  if prior is None:
    return np.zeros((n,), dtype=np.uint8)
  prior = as_row(prior)
  if prior.size != n:
    raise ValueError(f"Prior row has {prior.size} bytes, expected {n}.")
  return prior

def to_filter_type(filter_type:int) -> FilterType:
  try:
    return FilterType(int(filter_type))
  except ValueError:
    raise UnsupportedFilterType(f"Unsupported filter type: {filter_type}")

def paeth_predictor(a:int, b:int, c:int) -> int:
  """a = left, b = up, c = upper left. Ties prefer a, then b."""
  p = a + b - c
  pa = abs(p - a)
  pb = abs(p - b)
  pc = abs(p - c)
  if pa <= pb and pa <= pc:
    return a
  elif pb <= pc:
    return b
  return c

def unfilter_scanline(
  filter_type:int,
  scanline,
  prior:Optional[np.ndarray] = None,
  bpp:int = BYTES_PER_PIXEL,
) -> np.ndarray:
  """
  Reconstruct the raw bytes of a filtered row.

  filter_type: the row's filter type byte
  scanline: the filtered row (without the filter type byte)
  prior: the previous reconstructed row or None for the first row
  bpp: bytes per complete pixel, the distance to the "left" byte

  Returns: new uint8 array
  """
  filter_type = to_filter_type(filter_type)
  cur = as_row(scanline)
  n = cur.size

  if filter_type == FilterType.NONE:
    return cur.copy()
  elif filter_type == FilterType.SUB:
    if n % bpp == 0:
      return np.cumsum(cur.reshape(-1, bpp), axis=0, dtype=np.uint8).reshape(-1)
    out = bytearray(cur.tobytes())
    for i in range(bpp, n):
      out[i] = (out[i] + out[i - bpp]) & 0xFF
    return np.frombuffer(bytes(out), dtype=np.uint8).copy()
  elif filter_type == FilterType.UP:
    if prior is None:
      return cur.copy()
    return cur + _prior_row(prior, n)

  up = _prior_row(prior, n).tolist()
  out = bytearray(cur.tobytes())

  if filter_type == FilterType.AVERAGE:
    for i in range(n):
      left = out[i - bpp] if i >= bpp else 0
      out[i] = (out[i] + ((left + up[i]) >> 1)) & 0xFF
  else:
    for i in range(n):
      if i >= bpp:
        left = out[i - bpp]
        upleft = up[i - bpp]
      else:
        left = 0
        upleft = 0
      out[i] = (out[i] + paeth_predictor(left, up[i], upleft)) & 0xFF

  return np.frombuffer(bytes(out), dtype=np.uint8).copy()

def filter_scanline(
  filter_type:int,
  scanline,
  prior:Optional[np.ndarray] = None,
  bpp:int = BYTES_PER_PIXEL,
) -> np.ndarray:
  """
  Apply the forward filter to a raw row. prior is the previous
  raw (unfiltered) row. Inverse of unfilter_scanline.
  """
  filter_type = to_filter_type(filter_type)
  cur = as_row(scanline)
  n = cur.size

  if filter_type == FilterType.NONE:
    return cur.copy()

  left = np.zeros((n,), dtype=np.uint8)
  if n > bpp:
    left[bpp:] = cur[:-bpp]
  up = _prior_row(prior, n)

  if filter_type == FilterType.SUB:
    return cur - left
  elif filter_type == FilterType.UP:
    return cur - up
  elif filter_type == FilterType.AVERAGE:
    predicted = (left.astype(np.uint16) + up.astype(np.uint16)) >> 1
    return cur - predicted.astype(np.uint8)

  upleft = np.zeros((n,), dtype=np.uint8)
  if n > bpp:
    upleft[bpp:] = up[:-bpp]

  a = left.astype(np.int16)
  b = up.astype(np.int16)
  c = upleft.astype(np.int16)
  p = a + b - c
  pa = np.abs(p - a)
  pb = np.abs(p - b)
  pc = np.abs(p - c)
  predicted = np.where(
    (pa <= pb) & (pa <= pc), a,
    np.where(pb <= pc, b, c)
  ).astype(np.uint8)
  return cur - predicted
