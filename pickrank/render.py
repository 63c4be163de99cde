from typing import Sequence, Tuple
import math

import numpy as np

from .image import RasterImage

GLYPH_WIDTH = 5
GLYPH_HEIGHT = 7
GLYPH_SPACING = 1
PADDING = 2

BACKGROUND_COLOR = (0, 0, 0, 200)
TEXT_COLOR = (255, 255, 255, 255)

# 5x7 bitmaps, one int per row, MSB is the leftmost column
DIGIT_GLYPHS = {
  '0': (0b01110, 0b10001, 0b10011, 0b10101, 0b11001, 0b10001, 0b01110),
  '1': (0b00100, 0b01100, 0b00100, 0b00100, 0b00100, 0b00100, 0b01110),
  '2': (0b01110, 0b10001, 0b00001, 0b00110, 0b01000, 0b10000, 0b11111),
  '3': (0b01110, 0b10001, 0b00001, 0b00110, 0b00001, 0b10001, 0b01110),
  '4': (0b00010, 0b00110, 0b01010, 0b10010, 0b11111, 0b00010, 0b00010),
  '5': (0b11111, 0b10000, 0b11110, 0b00001, 0b00001, 0b10001, 0b01110),
  '6': (0b00110, 0b01000, 0b10000, 0b11110, 0b10001, 0b10001, 0b01110),
  '7': (0b11111, 0b00001, 0b00010, 0b00100, 0b01000, 0b01000, 0b01000),
  '8': (0b01110, 0b10001, 0b10001, 0b01110, 0b10001, 0b10001, 0b01110),
  '9': (0b01110, 0b10001, 0b10001, 0b01111, 0b00001, 0b00010, 0b01100),
}

def glyph_pixels(digit:str):
  """Yields the (col, row) of every set bit of a digit glyph."""
  for row, bits in enumerate(DIGIT_GLYPHS.get(digit, ())):
    for col in range(GLYPH_WIDTH):
      if bits & (1 << (GLYPH_WIDTH - 1 - col)):
        yield (col, row)

def label_size(label:str) -> Tuple[int,int]:
  n = len(label)
  width = n * GLYPH_WIDTH + (n - 1) * GLYPH_SPACING + PADDING * 2
  height = GLYPH_HEIGHT + PADDING * 2
  return (width, height)

def round_half_up(value:float) -> int:
  return int(math.floor(value + 0.5))

def label_box(centroid, label:str, width:int, height:int) -> Tuple[int,int,int,int]:
  """
  Returns (x, y, box_width, box_height) of the label centered
  on centroid, clamped so that it stays inside the image.
  """
  box_width, box_height = label_size(label)
  cx = round_half_up(centroid[0])
  cy = round_half_up(centroid[1])

  x = min(max(cx - box_width // 2, 0), max(width - box_width, 0))
  y = min(max(cy - box_height // 2, 0), max(height - box_height, 0))
  return (x, y, box_width, box_height)

def set_pixel(arr:np.ndarray, x:int, y:int, color) -> None:
  height, width = arr.shape[:2]
  if x < 0 or y < 0 or x >= width or y >= height:
    return
  arr[y, x] = color

def draw_label(arr:np.ndarray, centroid, label:str) -> None:
  """Paints label in place onto a (height, width, 4) array."""
  height, width = arr.shape[:2]
  x0, y0, box_width, box_height = label_box(centroid, label, width, height)

  for y in range(box_height):
    for x in range(box_width):
      set_pixel(arr, x0 + x, y0 + y, BACKGROUND_COLOR)

  x = x0 + PADDING
  y = y0 + PADDING
  for digit in label:
    for col, row in glyph_pixels(digit):
      set_pixel(arr, x + col, y + row, TEXT_COLOR)
    x += GLYPH_WIDTH + GLYPH_SPACING

def annotate(image:RasterImage, objects:Sequence) -> RasterImage:
  """
  Draw each object's rank onto a copy of image at the
  object's centroid. The input image is not modified.
  """
  annotated = image.copy()
  arr = annotated.numpy()
  for obj in objects:
    draw_label(arr, obj.centroid, str(obj.rank))
  return annotated
