"""Streaming package: frame decoder and cancellable stream iterator."""

from .stream_decoder import StreamDecoder, parse_frame
from .stream_controller import CompletionStream

__all__ = ["StreamDecoder", "parse_frame", "CompletionStream"]
