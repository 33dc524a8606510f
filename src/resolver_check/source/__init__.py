from resolver_check.source.extraction import extract_source

__all__ = ["extract_source"]
