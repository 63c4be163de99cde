from typing import List
from collections import namedtuple

import numpy as np
import fastremap

from .image import RasterImage
from .lib import pack_colors, unpack_color

DEFAULT_MIN_ALPHA = 16

Color = namedtuple('Color', [ 'r', 'g', 'b', 'a' ])
Centroid = namedtuple('Centroid', [ 'x', 'y' ])

class DetectedObject(
  namedtuple('DetectedObject', [ 'rank', 'color', 'pixel_count', 'centroid', 'intensity' ])
):
  __slots__ = ()

  def to_dict(self) -> dict:
    return {
      "rank": self.rank,
      "color": dict(self.color._asdict()),
      "pixelCount": self.pixel_count,
      "centroid": dict(self.centroid._asdict()),
      "intensity": self.intensity,
    }

def red_intensity(r:int, g:int, b:int) -> float:
  return r - (g + b) / 2

def segment(image:RasterImage, min_alpha:int = DEFAULT_MIN_ALPHA) -> List[DetectedObject]:
  """
  Group pixels into objects by exact RGBA color and rank them.

  Pixels with alpha below min_alpha are ignored. Pixels are
  grouped by color alone, so disjoint regions painted with the
  same color form a single object.

  Objects are sorted by descending red intensity r - (g+b)/2,
  then by descending r, then by descending pixel count. Any
  remaining ties keep the order in which the colors were first
  seen scanning row by row. Ranks start at 1.
  """
  arr = image.numpy()
  mask = arr[:,:,3] >= min_alpha
  ys, xs = np.nonzero(mask)
  if ys.size == 0:
    return []

  keys = pack_colors(arr[mask])
  # group ids are assigned in order of first appearance
  group_ids, mapping = fastremap.renumber(keys, start=0, preserve_zero=False)
  group_ids = group_ids.astype(np.intp, copy=False)
  num_groups = len(mapping)

  counts = np.bincount(group_ids, minlength=num_groups)
  sum_x = np.bincount(group_ids, weights=xs, minlength=num_groups)
  sum_y = np.bincount(group_ids, weights=ys, minlength=num_groups)

  candidates = []
  for key, group in sorted(mapping.items(), key=lambda item: item[1]):
    pixel_count = int(counts[group])
    color = Color(*unpack_color(key))
    candidates.append((
      color,
      pixel_count,
      Centroid(
        float(sum_x[group]) / pixel_count,
        float(sum_y[group]) / pixel_count,
      ),
      red_intensity(color.r, color.g, color.b),
    ))

  candidates.sort(key=lambda obj: (-obj[3], -obj[0].r, -obj[1]))

  return [
    DetectedObject(rank, color, pixel_count, centroid, intensity)
    for rank, (color, pixel_count, centroid, intensity) in enumerate(candidates, start=1)
  ]
