from .decoder import ContentHashDecoder

__all__ = ["ContentHashDecoder"]
