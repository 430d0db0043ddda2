"""Wire encoders for metric points."""

from botmetrics.core.encoding.line_protocol import encode_point, encode_points

__all__ = ["encode_point", "encode_points"]
