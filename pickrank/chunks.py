from typing import Iterator, List, Tuple
from collections import namedtuple

from .headers import (
  ImageHeader, FormatError,
  InvalidSignature, MissingHeader, TruncatedChunk,
)
from .lib import crc32, read_u32, write_u32

SIGNATURE = bytes([ 137, 80, 78, 71, 13, 10, 26, 10 ])

IHDR = b'IHDR'
IDAT = b'IDAT'
IEND = b'IEND'

Chunk = namedtuple('Chunk', [ 'type', 'data', 'crc' ])

def check_signature(binary:bytes):
  if bytes(binary[:len(SIGNATURE)]) != SIGNATURE:
    raise InvalidSignature(f"Incorrect signature. Got: {bytes(binary[:8])} Expected: {SIGNATURE}")

def iter_chunks(binary:bytes, strict:bool = False) -> Iterator[Chunk]:
  """
  Yields each chunk in the stream after the signature.

  The stored checksum is returned as is and is not verified.
  Scanning stops after the IEND chunk, trailing bytes are ignored.

  By default a short tail ends the scan: a partial chunk header
  is dropped and chunk data running past the end is cut off.
  Whether the image data is complete is left to the decoder.
  strict: raise TruncatedChunk for a short tail instead
  """
  check_signature(binary)

  offset = len(SIGNATURE)
  end = len(binary)
  while offset < end:
    if offset + 8 > end:
      if not strict:
        break
      raise TruncatedChunk(f"Chunk header at byte {offset} runs past the end of the stream.")

    length = read_u32(binary, offset)
    chunk_type = bytes(binary[offset+4:offset+8])
    offset += 8

    if strict and offset + length > end:
      raise TruncatedChunk(
        f"Chunk {chunk_type} at byte {offset - 8} declares {length} bytes "
        f"but only {end - offset} remain."
      )

    data = bytes(binary[offset:offset+length])
    offset += length
    # None when the stream ends before the checksum
    crc = read_u32(binary, offset) if offset + 4 <= end else None
    offset += 4

    yield Chunk(chunk_type, data, crc)

    if chunk_type == IEND:
      break

def decode_chunks(binary:bytes) -> Tuple[ImageHeader, bytes]:
  """Returns the image header and the concatenated IDAT payload."""
  header = None
  idat = []
  for chunk in iter_chunks(binary):
    if chunk.type == IHDR:
      header = ImageHeader.frombytes(chunk.data)
    elif chunk.type == IDAT:
      idat.append(chunk.data)

  if header is None:
    raise MissingHeader("Stream does not contain an IHDR chunk.")

  return header, b''.join(idat)

def make_chunk(chunk_type:bytes, data:bytes) -> bytes:
  if len(chunk_type) != 4:
    raise FormatError(f"Chunk types are four bytes. Got: {chunk_type}")
  data = bytes(data)
  return b''.join([
    write_u32(len(data)),
    chunk_type,
    data,
    write_u32(crc32(chunk_type + data)),
  ])

def encode_chunks(width:int, height:int, payload:bytes) -> bytes:
  header = ImageHeader(width, height)
  return b''.join([
    SIGNATURE,
    make_chunk(IHDR, header.tobytes()),
    make_chunk(IDAT, payload),
    make_chunk(IEND, b''),
  ])

def verify_chunks(binary:bytes) -> List[Tuple[int, bytes, str]]:
  """
  Returns (index, type, problem) of every chunk whose checksum
  is "missing" from the end of the stream or is a "mismatch".
  Raises TruncatedChunk if a chunk is cut short.
  """
  damaged = []
  for i, chunk in enumerate(iter_chunks(binary, strict=True)):
    if chunk.crc is None:
      damaged.append((i, chunk.type, "missing"))
    elif crc32(chunk.type + chunk.data) != chunk.crc:
      damaged.append((i, chunk.type, "mismatch"))
  return damaged
