"""Errors raised while converting a FlickrLogos dataset."""


class ConversionError(Exception):
    """Base class for every error that aborts a conversion run."""


class ConfigurationError(ConversionError):
    """Invalid directory, numeric flag or label format given to the converter."""


class AnnotationError(ConversionError):
    """Missing annotation file or a bounding box line that cannot be parsed."""
