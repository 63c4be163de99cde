import os
import gzip

from .codec import decode, encode
from .image import RasterImage

def _load(filelike) -> bytes:
  if hasattr(filelike, 'read'):
    binary = filelike.read()
  elif (
    isinstance(filelike, str) 
    and os.path.splitext(filelike)[1] == '.gz'
  ):
    with gzip.open(filelike, 'rb') as f:
      binary = f.read()
  else:
    with open(filelike, 'rb') as f:
      binary = f.read()
  return binary

def bload(filelike) -> bytes:
  """Load the binary file."""
  return _load(filelike)

def load(filelike) -> RasterImage:
  """Load an image from a file-like object or file path."""
  return decode(_load(filelike))

def save(image, filelike, level:int = 9) -> None:
  """Save an image (or already encoded bytes) into the file-like object or file path."""
  if isinstance(image, RasterImage):
    binary = encode(image, level=level)
  else:
    binary = bytes(image)

  if hasattr(filelike, 'write'):
    filelike.write(binary)
  elif (
    isinstance(filelike, str) 
    and os.path.splitext(filelike)[1] == '.gz'
  ):
    with gzip.open(filelike, 'wb') as f:
      f.write(binary)
  else:
    with open(filelike, 'wb') as f:
      f.write(binary)
