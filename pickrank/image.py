import numpy as np

from .headers import PixelBufferSizeMismatch

class RasterImage:
  """
  A decoded 8-bit RGBA image.

  pixels is a flat uint8 buffer of width * height * 4 bytes
  in row major order with channels R,G,B,A.
  """
  CHANNELS = 4

  def __init__(self, width:int, height:int, pixels):
    self.width = int(width)
    self.height = int(height)

    if isinstance(pixels, (bytes, bytearray, memoryview)):
      pixels = np.frombuffer(pixels, dtype=np.uint8)
    elif isinstance(pixels, np.ndarray):
      if pixels.dtype != np.uint8:
        raise TypeError(f"Pixels must be uint8. Got: {pixels.dtype}")
      pixels = pixels.reshape(-1)
    else:
      # sequences of ints, each must fit in a byte
      values = np.asarray(pixels)
      if values.size and (values.min() < 0 or values.max() > 255):
        raise ValueError("Pixel values must be in the range 0-255.")
      pixels = values.astype(np.uint8).reshape(-1)

    expected = self.width * self.height * RasterImage.CHANNELS
    if pixels.size != expected:
      raise PixelBufferSizeMismatch(
        f"Pixel buffer size does not match image dimensions. "
        f"Got: {pixels.size} bytes Expected: {expected} ({self.width}x{self.height}x4)"
      )
    self.pixels = pixels

  @classmethod
  def blank(kls, width:int, height:int, color=(0,0,0,0)) -> "RasterImage":
    pixels = np.empty((int(height), int(width), RasterImage.CHANNELS), dtype=np.uint8)
    pixels[:] = color
    return RasterImage(width, height, pixels)

  @classmethod
  def fromarray(kls, arr:np.ndarray) -> "RasterImage":
    """Accepts a (height, width, 4) uint8 array."""
    if arr.ndim != 3 or arr.shape[2] != RasterImage.CHANNELS:
      raise ValueError(f"Expected a (height, width, 4) array. Got: {arr.shape}")
    return RasterImage(arr.shape[1], arr.shape[0], np.ascontiguousarray(arr))

  @property
  def shape(self):
    return (self.height, self.width, RasterImage.CHANNELS)

  def numpy(self) -> np.ndarray:
    return self.pixels.reshape(self.shape)

  def copy(self) -> "RasterImage":
    return RasterImage(self.width, self.height, self.pixels.copy())

  def __eq__(self, other) -> bool:
    if not isinstance(other, RasterImage):
      return NotImplemented
    return (
      self.width == other.width
      and self.height == other.height
      and np.array_equal(self.pixels, other.pixels)
    )

  def __repr__(self):
    return f"RasterImage(width={self.width}, height={self.height})"
