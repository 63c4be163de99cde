import numpy as np

CRC32_POLYNOMIAL = 0xEDB88320

def _crc32_table():
  # reflected polynomial, LSB first
  table = []
  for n in range(256):
    c = n
    for k in range(8):
      if c & 1:
        c = CRC32_POLYNOMIAL ^ (c >> 1)
      else:
        c = c >> 1
    table.append(c)
  return tuple(table)

CRC32_TABLE = _crc32_table()

def crc32(data) -> int:
  """CRC-32 (ISO-HDLC) of a byte span as used by PNG chunks."""
  table = CRC32_TABLE
  c = 0xFFFFFFFF
  for byte in bytes(data):
    c = table[(c ^ byte) & 0xFF] ^ (c >> 8)
  return c ^ 0xFFFFFFFF

def read_u32(buffer, offset:int = 0) -> int:
  return int.from_bytes(buffer[offset:offset+4], byteorder='big', signed=False)

def write_u32(value:int) -> bytes:
  return int(value).to_bytes(4, 'big')

def unpack_color(key:int):
  key = int(key)
  return (
    (key >> 24) & 0xFF,
    (key >> 16) & 0xFF,
    (key >> 8) & 0xFF,
    key & 0xFF,
  )

def pack_colors(pixels:np.ndarray) -> np.ndarray:
  """Packs RGBA pixels into one uint32 key each (R in the high byte)."""
  pixels = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1, 4)
  return pixels.view('>u4').reshape(-1).astype(np.uint32)
