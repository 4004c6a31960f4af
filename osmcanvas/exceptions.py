class OSMCanvasError(Exception):
    """Base exception for osmcanvas"""
    pass

class ParseError(OSMCanvasError, ValueError):
    """Raised when an extract cannot be ingested (malformed XML, missing or degenerate bounds)"""
    pass

class FetchError(OSMCanvasError, RuntimeError):
    """Raised when an extract cannot be downloaded"""
    pass
