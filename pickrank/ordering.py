from typing import List, Optional, Tuple

from .codec import decode, encode
from .render import annotate
from .segment import DetectedObject, segment, DEFAULT_MIN_ALPHA

def parse_object_ordering(
  pick_binary:Optional[bytes], 
  min_alpha:int = DEFAULT_MIN_ALPHA,
) -> List[DetectedObject]:
  """Rank the color coded objects of a pick image."""
  if not pick_binary:
    return []
  return segment(decode(pick_binary), min_alpha=min_alpha)

def annotate_top_image(
  top_binary:Optional[bytes], 
  objects:List[DetectedObject],
) -> Optional[bytes]:
  """Burn the object ranks into the top view image."""
  if not top_binary:
    return None
  return encode(annotate(decode(top_binary), objects))

def generate_object_ordering(
  pick_binary:Optional[bytes],
  top_binary:Optional[bytes],
  min_alpha:int = DEFAULT_MIN_ALPHA,
) -> Tuple[List[DetectedObject], Optional[bytes]]:
  """
  Rank the objects of the pick image and label them on
  the top image.

  Returns: (objects, annotated top image)

  If either image is missing, returns ([], None). If no
  objects are found, the top image is returned unchanged.
  """
  if not pick_binary or not top_binary:
    return [], None

  objects = parse_object_ordering(pick_binary, min_alpha=min_alpha)
  if len(objects) == 0:
    return objects, bytes(top_binary)

  return objects, annotate_top_image(top_binary, objects)
