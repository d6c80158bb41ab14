from enum import Enum


class PreviewSize(str, Enum):
    """
    Maximum dimensions of a rendered page preview. The rendered image may be slightly smaller.
    """
    MEDIUM = "750x900"
    BIG = "1280x1810"
