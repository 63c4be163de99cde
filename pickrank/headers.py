from .lib import read_u32, write_u32

class FormatError(Exception):
	pass

class InvalidSignature(FormatError):
	pass

class MissingHeader(FormatError):
	pass

class TruncatedChunk(FormatError):
	pass

class UnsupportedColorModel(FormatError):
	pass

class UnsupportedCompressionOrFilterMethod(FormatError):
	pass

class UnsupportedInterlace(FormatError):
	pass

class UnsupportedFilterType(FormatError):
	pass

class DecodeError(FormatError):
	pass

class PixelBufferSizeMismatch(ValueError):
	pass

class ImageHeader:
  """The 13 byte IHDR payload."""
  CHUNK_TYPE = b'IHDR'
  HEADER_BYTES = 13

  BIT_DEPTH = 8
  COLOR_TYPE_RGBA = 6
  BYTES_PER_PIXEL = 4

  def __init__(
    self, 
    width:int, height:int,
    bit_depth:int = 8,
    color_type:int = 6,
    compression_method:int = 0,
    filter_method:int = 0,
    interlace_method:int = 0,
  ):
    self.width = int(width)
    self.height = int(height)
    self.bit_depth = int(bit_depth)
    self.color_type = int(color_type)
    self.compression_method = int(compression_method)
    self.filter_method = int(filter_method)
    self.interlace_method = int(interlace_method)

  @classmethod
  def frombytes(kls, buffer:bytes):
    if len(buffer) < ImageHeader.HEADER_BYTES:
      raise FormatError(f"IHDR chunk too short. Got: {len(buffer)} bytes Expected: {ImageHeader.HEADER_BYTES}")

    return ImageHeader(
      width=read_u32(buffer, 0),
      height=read_u32(buffer, 4),
      bit_depth=buffer[8],
      color_type=buffer[9],
      compression_method=buffer[10],
      filter_method=buffer[11],
      interlace_method=buffer[12],
    )

  def tobytes(self) -> bytes:
    return b''.join([
      write_u32(self.width),
      write_u32(self.height),
      self.bit_depth.to_bytes(1, 'big'),
      self.color_type.to_bytes(1, 'big'),
      self.compression_method.to_bytes(1, 'big'),
      self.filter_method.to_bytes(1, 'big'),
      self.interlace_method.to_bytes(1, 'big'),
    ])

  def validate(self) -> "ImageHeader":
    """Raises unless this is an 8-bit RGBA non-interlaced image."""
    if self.bit_depth != ImageHeader.BIT_DEPTH or self.color_type != ImageHeader.COLOR_TYPE_RGBA:
      raise UnsupportedColorModel(
        f"Only 8-bit RGBA images are supported. "
        f"Got: bit depth {self.bit_depth} color type {self.color_type}"
      )
    if self.compression_method != 0 or self.filter_method != 0:
      raise UnsupportedCompressionOrFilterMethod(
        f"Unsupported compression or filter method. "
        f"Got: compression {self.compression_method} filter {self.filter_method}"
      )
    if self.interlace_method != 0:
      raise UnsupportedInterlace(f"Interlaced images are not supported. Got: {self.interlace_method}")
    return self

  @property
  def stride(self) -> int:
    return self.width * ImageHeader.BYTES_PER_PIXEL

  @property
  def nbytes(self) -> int:
    return self.stride * self.height

  def scanline_bytes(self) -> int:
    """Size of the inflated image data: a filter byte per row plus the row."""
    return (self.stride + 1) * self.height

  def details(self) -> str:
    return f"""
    type:          {ImageHeader.CHUNK_TYPE.decode('ascii')}
    width:         {self.width}
    height:        {self.height}
    bit depth:     {self.bit_depth}
    color type:    {self.color_type}
    compression:   {self.compression_method}
    filter:        {self.filter_method}
    interlace:     {self.interlace_method}
    ---
    stride:        {self.stride}
    pixel bytes:   {self.nbytes}
    """

  def __eq__(self, other) -> bool:
    if not isinstance(other, ImageHeader):
      return NotImplemented
    return self.__dict__ == other.__dict__

  def __repr__(self):
    return str(self.__dict__)
