"""
Core logic for video frame analysis.

This package is framework-agnostic. It doesn't import ffmpeg wrappers,
the Anthropic SDK or configuration libraries, so the pipeline can be
tested with fakes and the infrastructure swapped without touching it.
"""
