"""A small RGBA PNG codec and pick image ranker.

Slicers can export a "pick" image in which every printable
object is painted in its own flat color, alongside a "top"
view render of the plate. pickrank decodes the pick image,
groups its pixels by exact color into objects, ranks the
objects by how red their color is and writes the rank
numbers onto the top view at each object's centroid.

The codec handles 8-bit RGBA non-interlaced PNG only. All
five scanline filters are reversed on decode. Encoding
always uses the NONE filter followed by maximum effort
deflate. Chunk checksums are written on encode but are not
verified on decode; codec.check reports them on request.
"""
from .image import RasterImage
from .codec import (
	decode, encode, header,
	components, component_lengths,
	check, ok,
)
from .filters import FilterType, filter_scanline, unfilter_scanline
from .segment import segment, DetectedObject, Color, Centroid
from .render import annotate
from .ordering import (
	parse_object_ordering, annotate_top_image,
	generate_object_ordering,
)
from .headers import (
	FormatError, DecodeError, ImageHeader,
	InvalidSignature, MissingHeader, TruncatedChunk,
	UnsupportedColorModel, UnsupportedCompressionOrFilterMethod,
	UnsupportedInterlace, UnsupportedFilterType,
	PixelBufferSizeMismatch,
)
from .lib import crc32
from .util import save, load, bload
