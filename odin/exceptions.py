"""Custom exception classes for the Odin web application."""


class OdinException(Exception):
    """
    Base exception class for all Odin errors.
    """
    pass


class InvalidIdentifierError(OdinException):
    """
    Raised when an identifier is not a valid short identifier.
    """
    pass


class DataFileNotFoundError(OdinException):
    """
    Raised when a requested data file does not exist.
    """
    pass


class TagNotFoundError(OdinException):
    """
    Raised when a requested tag does not exist.
    """
    pass


class InvalidTagError(OdinException):
    """
    Raised when tag attributes fail validation.
    """
    pass


class InvalidDataSeriesError(OdinException):
    """
    Raised when a chart's data series does not name exactly two columns.
    """
    pass


class GeometryProjectionError(OdinException):
    """
    Raised when tabular content cannot be projected to GeoJSON.
    """
    pass


class ResponseBuildError(OdinException):
    """
    Raised when a response body cannot be assembled from its parts.
    """
    pass


class InvalidQueryError(OdinException):
    """
    Raised when collection query parameters (sort, criteria) are not supported.
    """
    pass
