from typing import Dict, List, Tuple
import zlib

import numpy as np

from .chunks import (
  check_signature, iter_chunks, decode_chunks,
  encode_chunks, verify_chunks,
)
from .filters import FilterType, unfilter_scanline
from .headers import (
  ImageHeader, FormatError, DecodeError,
  InvalidSignature, PixelBufferSizeMismatch,
)
from .image import RasterImage

def header(binary:bytes) -> ImageHeader:
  """Decode the IHDR header from a PNG bytestream without touching pixels."""
  head, _ = decode_chunks(binary)
  return head

def inflate(payload:bytes) -> bytes:
  try:
    return zlib.decompress(payload)
  except zlib.error as err:
    raise DecodeError(f"Image data could not be inflated: {err}") from err

def decode(binary:bytes) -> RasterImage:
  """
  Decode an 8-bit RGBA, non-interlaced PNG into a RasterImage.

  Chunk checksums are not verified. Use check for that.
  """
  head, payload = decode_chunks(binary)
  head.validate()

  stride = head.stride
  raw = inflate(payload)
  if len(raw) < head.scanline_bytes():
    raise DecodeError(
      f"Image data too short. Got: {len(raw)} bytes "
      f"Expected: {head.scanline_bytes()} for {head.width}x{head.height}"
    )

  pixels = np.zeros((head.nbytes,), dtype=np.uint8)
  prior = None
  offset = 0
  for y in range(head.height):
    filter_type = raw[offset]
    offset += 1
    row = unfilter_scanline(filter_type, raw[offset:offset+stride], prior)
    offset += stride
    pixels[y*stride:(y+1)*stride] = row
    prior = row

  return RasterImage(head.width, head.height, pixels)

def encode(image:RasterImage, level:int = 9) -> bytes:
  """
  Encode a RasterImage as an 8-bit RGBA PNG.

  Every row uses the NONE filter and the image data is
  deflated at the given level (default 9, maximum effort).
  """
  width, height = image.width, image.height
  pixels = np.asarray(image.pixels, dtype=np.uint8).reshape(-1)
  if pixels.size != width * height * 4:
    raise PixelBufferSizeMismatch(
      f"Pixel buffer size does not match image dimensions. "
      f"Got: {pixels.size} bytes Expected: {width * height * 4}"
    )
  if not (0 <= level <= 9):
    raise ValueError(f"Compression level must be between 0 and 9. Got: {level}")

  rows = np.empty((height, width * 4 + 1), dtype=np.uint8)
  rows[:,0] = FilterType.NONE
  rows[:,1:] = pixels.reshape((height, width * 4))

  payload = zlib.compress(rows.tobytes(), level)
  return encode_chunks(width, height, payload)

def components(binary:bytes) -> List[Tuple[str, bytes]]:
  """List the (type, data) of every chunk in stream order."""
  return [
    (chunk.type.decode('ascii', errors='replace'), chunk.data)
    for chunk in iter_chunks(binary)
  ]

def component_lengths(binary:bytes) -> List[Tuple[str, int]]:
  return [ (name, len(data)) for name, data in components(binary) ]

def check(binary:bytes) -> Dict[str, object]:
  """
  Test for file corruption, reporting which sections are damaged.

  Decoding itself is lenient about checksums, this is the
  place to verify them.
  """
  report = {
    "signature": None,
    "chunks": None,
    "crc": None,
    "missing_crc": None,
    "header": None,
    "pixels": None,
  }

  try:
    check_signature(binary)
  except InvalidSignature:
    report["signature"] = False
    return report

  report["signature"] = True

  try:
    damaged = verify_chunks(binary)
  except FormatError:
    report["chunks"] = False
    return report

  report["chunks"] = True

  def label(i, chunk_type):
    return f"{i}:{chunk_type.decode('ascii', errors='replace')}"

  report["crc"] = [
    label(i, chunk_type) for i, chunk_type, problem in damaged
    if problem == "mismatch"
  ]
  report["missing_crc"] = [
    label(i, chunk_type) for i, chunk_type, problem in damaged
    if problem == "missing"
  ]

  try:
    header(binary).validate()
  except FormatError:
    report["header"] = False
    return report

  report["header"] = True

  try:
    decode(binary)
    report["pixels"] = True
  except FormatError:
    report["pixels"] = False

  return report

def ok(binary:bytes) -> bool:
  """
  Runs check for file corruption but only reports
  whether the file is ok as a whole.
  """
  report = check(binary)
  if report["signature"] == False:
    return False
  elif report["chunks"] == False:
    return False
  elif report["header"] == False:
    return False
  elif report["pixels"] == False:
    return False
  elif report["crc"]:
    return False
  elif report["missing_crc"]:
    return False

  return True
